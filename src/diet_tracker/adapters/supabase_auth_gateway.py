"""Supabase auth lookups."""

from dataclasses import dataclass

from supabase import Client

from diet_tracker.services.auth import AuthGateway


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Resolves access tokens with Supabase auth."""

    client: Client

    def get_user_id(self, access_token: str) -> str | None:
        """Return the id of the user owning ``access_token``."""
        response = self.client.auth.get_user(access_token)
        if response is None or response.user is None:
            return None
        return response.user.id

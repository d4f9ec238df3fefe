"""Access-token resolution."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

_logger = logging.getLogger(__name__)


class AuthGateway(Protocol):
    """Hosted authentication provider."""

    def get_user_id(self, access_token: str) -> str | None:
        """Return the user id the token belongs to."""


@dataclass
class AuthService:
    """Turns bearer tokens into user ids."""

    gateway: AuthGateway

    def get_current_user_id(self, access_token: str | None) -> UUID | None:
        """Return the authenticated user's id, or None for any bad token."""
        if not access_token:
            return None
        try:
            raw_id = self.gateway.get_user_id(access_token)
        except Exception as exc:
            _logger.info("Rejected access token: %s", exc)
            return None
        if not raw_id:
            return None
        try:
            return UUID(str(raw_id))
        except ValueError:
            _logger.warning("Auth provider returned a malformed user id")
            return None

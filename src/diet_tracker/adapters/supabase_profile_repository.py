"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from diet_tracker.domain.profiles import (
    ActivityLevel,
    GoalType,
    MacroTargets,
    UserProfile,
)
from diet_tracker.services.profiles import ProfileRepository

_PROFILE_COLUMNS = (
    "user_id, full_name, age, height, weight, activity_level, goal_type, "
    "daily_calories, daily_protein, daily_carbs, daily_fat, "
    "dietary_restrictions, updated_at"
)
# Domain field names that differ from the table's column names.
_COLUMN_NAMES = {"height_cm": "height", "weight_kg": "weight"}


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile for a user."""
        response = (
            self.client.table("user_profiles")
            .select(_PROFILE_COLUMNS)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def create_profile(self, profile: UserProfile) -> UserProfile:
        """Insert a profile row."""
        response = (
            self.client.table("user_profiles")
            .insert(
                {
                    "user_id": profile.user_id,
                    "full_name": profile.full_name,
                    "goal_type": profile.goal_type.value,
                    "daily_calories": profile.targets.calories,
                    "daily_protein": profile.targets.protein_g,
                    "daily_carbs": profile.targets.carbs_g,
                    "daily_fat": profile.targets.fat_g,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user profile")
        return _parse_profile(response.data[0])

    def update_profile(
        self, user_id: str, changes: dict[str, object]
    ) -> UserProfile | None:
        """Update profile columns and return the row."""
        payload = {_COLUMN_NAMES.get(key, key): value for key, value in changes.items()}
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("user_profiles")
            .update(payload)
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> UserProfile:
    activity = row.get("activity_level")
    updated_at = row.get("updated_at")
    return UserProfile(
        user_id=str(row["user_id"]),
        full_name=str(row.get("full_name") or ""),
        targets=MacroTargets(
            calories=int(row.get("daily_calories") or 0),
            protein_g=int(row.get("daily_protein") or 0),
            carbs_g=int(row.get("daily_carbs") or 0),
            fat_g=int(row.get("daily_fat") or 0),
        ),
        goal_type=GoalType(row.get("goal_type") or GoalType.MAINTENANCE.value),
        age=row.get("age"),
        height_cm=row.get("height"),
        weight_kg=row.get("weight"),
        activity_level=ActivityLevel(activity) if activity else None,
        dietary_restrictions=row.get("dietary_restrictions"),
        updated_at=datetime.fromisoformat(str(updated_at)) if updated_at else None,
    )

"""User profile and goal management."""

import logging
from dataclasses import dataclass
from typing import Protocol

from diet_tracker.domain.nutrition import round_half_up
from diet_tracker.domain.profiles import (
    DEFAULT_TARGETS,
    GoalType,
    MacroTargets,
    UserProfile,
)
from diet_tracker.domain.results import WriteFailure

_logger = logging.getLogger(__name__)

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

# Share of daily calories as (protein, carbs, fat).
_MACRO_SPLITS: dict[GoalType, tuple[float, float, float]] = {
    GoalType.WEIGHT_LOSS: (0.35, 0.30, 0.35),
    GoalType.MUSCLE_GAIN: (0.30, 0.40, 0.30),
    GoalType.BULKING: (0.25, 0.45, 0.30),
    GoalType.CUTTING: (0.40, 0.25, 0.35),
    GoalType.MAINTENANCE: (0.30, 0.40, 0.30),
}

_EDITABLE_FIELDS = {
    "full_name",
    "age",
    "height_cm",
    "weight_kg",
    "activity_level",
    "dietary_restrictions",
}


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile for a user."""

    def create_profile(self, profile: UserProfile) -> UserProfile:
        """Insert a profile and return the stored row."""

    def update_profile(
        self, user_id: str, changes: dict[str, object]
    ) -> UserProfile | None:
        """Update profile columns and return the row."""


def calculate_macro_targets(calories: int, goal_type: GoalType) -> MacroTargets:
    """Split a calorie target into gram targets for the goal type."""
    protein_share, carbs_share, fat_share = _MACRO_SPLITS[goal_type]
    return MacroTargets(
        calories=calories,
        protein_g=int(round_half_up(calories * protein_share / KCAL_PER_G_PROTEIN, 0)),
        carbs_g=int(round_half_up(calories * carbs_share / KCAL_PER_G_CARBS, 0)),
        fat_g=int(round_half_up(calories * fat_share / KCAL_PER_G_FAT, 0)),
    )


@dataclass
class ProfileService:
    """Application service for profiles and nutrition goals."""

    repository: ProfileRepository

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the stored profile, or None when missing or unreadable."""
        try:
            return self.repository.get_profile(user_id)
        except Exception as exc:
            _logger.warning("Failed to load profile for %s: %s", user_id, exc)
            return None

    def get_or_create_profile(
        self, user_id: str, full_name: str
    ) -> UserProfile | WriteFailure:
        """Return the user's profile, creating one with default goals."""
        existing = self.get_profile(user_id)
        if existing:
            return existing
        profile = UserProfile(
            user_id=user_id,
            full_name=full_name,
            targets=DEFAULT_TARGETS,
            goal_type=GoalType.MAINTENANCE,
        )
        try:
            return self.repository.create_profile(profile)
        except Exception:
            _logger.exception("Failed to create profile for %s", user_id)
            return WriteFailure.storage("Could not create the profile")

    def update_profile(
        self, user_id: str, changes: dict[str, object]
    ) -> UserProfile | WriteFailure:
        """Update personal details; goal columns go through ``update_goals``."""
        unknown = sorted(set(changes) - _EDITABLE_FIELDS)
        if unknown:
            return WriteFailure.invalid(unknown[0], "Field cannot be edited here")
        for field in ("age", "height_cm", "weight_kg"):
            value = changes.get(field)
            if isinstance(value, int | float) and value <= 0:
                return WriteFailure.invalid(field, "Value must be positive")
        if "full_name" in changes and not str(changes["full_name"] or "").strip():
            return WriteFailure.invalid("full_name", "Name is required")
        return self._apply(user_id, changes)

    def update_goals(
        self, user_id: str, calories: int, goal_type: GoalType
    ) -> UserProfile | WriteFailure:
        """Set a calorie target and derive macro targets from the goal type."""
        if calories <= 0:
            return WriteFailure.invalid("calories", "Calorie target must be positive")
        targets = calculate_macro_targets(calories, goal_type)
        return self._apply(
            user_id,
            {
                "goal_type": goal_type.value,
                "daily_calories": targets.calories,
                "daily_protein": targets.protein_g,
                "daily_carbs": targets.carbs_g,
                "daily_fat": targets.fat_g,
            },
        )

    def _apply(
        self, user_id: str, changes: dict[str, object]
    ) -> UserProfile | WriteFailure:
        try:
            updated = self.repository.update_profile(user_id, changes)
        except Exception:
            _logger.exception("Failed to update profile for %s", user_id)
            return WriteFailure.storage("Could not update the profile")
        if updated is None:
            return WriteFailure.not_found("Profile not found")
        return updated

"""Domain models for user profiles and nutrition goals."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class GoalType(StrEnum):
    """What the user is working towards."""

    WEIGHT_LOSS = "weight-loss"
    MUSCLE_GAIN = "muscle-gain"
    MAINTENANCE = "maintenance"
    BULKING = "bulking"
    CUTTING = "cutting"


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very-active"


@dataclass(frozen=True)
class MacroTargets:
    """Daily calorie and macronutrient targets."""

    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int


DEFAULT_TARGETS = MacroTargets(calories=2000, protein_g=150, carbs_g=250, fat_g=67)


@dataclass(frozen=True)
class UserProfile:
    """Profile row for a user."""

    user_id: str
    full_name: str
    targets: MacroTargets
    goal_type: GoalType = GoalType.MAINTENANCE
    age: int | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    activity_level: ActivityLevel | None = None
    dietary_restrictions: str | None = None
    updated_at: datetime | None = None

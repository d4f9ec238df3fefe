"""Nutrient values and the rounding rules applied to them."""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

CALORIE_PLACES = 0
GRAM_PLACES = 1
SODIUM_PLACES = 3


def round_half_up(value: float, places: int) -> float:
    """Round half away from zero at ``places`` decimals.

    Uses the decimal repr of the float so that 0.15 rounds to 0.2 and not to
    0.1 as binary ``round`` would.
    """
    quantum = Decimal(1).scaleb(-places)
    exact = Decimal(repr(value))
    if not exact.is_finite():
        return value
    with localcontext() as context:
        # quantize fails when the result has more digits than the precision
        context.prec = max(context.prec, exact.adjusted() + places + 2)
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def round_calories(value: float) -> float:
    """Round kilocalories to a whole number."""
    return round_half_up(value, CALORIE_PLACES)


def round_grams(value: float) -> float:
    """Round a gram quantity to one decimal."""
    return round_half_up(value, GRAM_PLACES)


def round_sodium(value: float) -> float:
    """Round sodium grams to three decimals."""
    return round_half_up(value, SODIUM_PLACES)


def _scale_optional(value: float | None, factor: float, places: int) -> float | None:
    if not value:
        return None
    return round_half_up(value * factor, places)


@dataclass(frozen=True)
class NutrientValues:
    """Nutrients for one serving, or for one logged portion."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None

    def scaled(self, factor: float) -> "NutrientValues":
        """Return the values multiplied by ``factor`` and rounded.

        Optional nutrients that are missing or zero stay ``None``.
        """
        return NutrientValues(
            calories=round_calories(self.calories * factor),
            protein=round_grams(self.protein * factor),
            carbs=round_grams(self.carbs * factor),
            fat=round_grams(self.fat * factor),
            fiber=_scale_optional(self.fiber, factor, GRAM_PLACES),
            sugar=_scale_optional(self.sugar, factor, GRAM_PLACES),
            sodium=_scale_optional(self.sodium, factor, SODIUM_PLACES),
        )

    def invalid_fields(self) -> list[str]:
        """Return the names of fields that are negative or not a finite number."""
        return [
            name
            for name, value in self.as_dict().items()
            if value is not None and (not math.isfinite(value) or value < 0)
        ]

    def as_dict(self) -> dict[str, float | None]:
        """Serialize to a plain dict."""
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
            "sugar": self.sugar,
            "sodium": self.sodium,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "NutrientValues":
        """Build values from a dict such as a stored snapshot."""
        return cls(
            calories=_to_float(payload.get("calories")),
            protein=_to_float(payload.get("protein")),
            carbs=_to_float(payload.get("carbs")),
            fat=_to_float(payload.get("fat")),
            fiber=_to_optional_float(payload.get("fiber")),
            sugar=_to_optional_float(payload.get("sugar")),
            sodium=_to_optional_float(payload.get("sodium")),
        )


def _to_float(value: object) -> float:
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def _to_optional_float(value: object) -> float | None:
    if value is None:
        return None
    return _to_float(value)

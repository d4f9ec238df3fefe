"""Daily and weekly nutrition summaries.

Summaries are recomputed from the stored entries on every call; nothing is
cached or maintained incrementally.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from diet_tracker.domain.meals import (
    DailyNutritionSummary,
    MealEntry,
    MealType,
    NutrientTotals,
    PeriodAverages,
)
from diet_tracker.domain.nutrition import round_calories, round_grams, round_sodium
from diet_tracker.services.civil_time import trailing_days
from diet_tracker.services.meals import MealLogService

WEEK_DAYS = 7


@dataclass
class SummaryService:
    """Aggregates meal entries into per-day totals."""

    meal_log_service: MealLogService

    def get_daily_summary(self, user_id: str, day: date) -> DailyNutritionSummary:
        """Return the totals for one civil date; all zeros when empty."""
        entries = self.meal_log_service.get_entries_for_day(user_id, day.isoformat())
        return summarize_day(day, entries)

    def get_weekly_summary(
        self, user_id: str, end_date: date
    ) -> list[DailyNutritionSummary]:
        """Return seven daily summaries ending at ``end_date``, oldest first."""
        return [
            self.get_daily_summary(user_id, day)
            for day in trailing_days(end_date, WEEK_DAYS)
        ]


def summarize_day(day: date, entries: Sequence[MealEntry]) -> DailyNutritionSummary:
    """Fold entries into a daily summary, rounding only the final sums."""
    overall = _sum_entries(entries)
    meals_by_type = {meal_type: 0 for meal_type in MealType}
    for entry in entries:
        meals_by_type[entry.meal_type] += 1
    totals_by_type = {
        meal_type: _sum_entries(
            [entry for entry in entries if entry.meal_type == meal_type]
        )
        for meal_type in MealType
    }
    return DailyNutritionSummary(
        day=day,
        total_calories=overall.calories,
        total_protein=overall.protein,
        total_carbs=overall.carbs,
        total_fat=overall.fat,
        total_fiber=overall.fiber,
        total_sugar=overall.sugar,
        total_sodium=overall.sodium,
        meal_count=len(entries),
        meals_by_type=meals_by_type,
        totals_by_type=totals_by_type,
    )


def weekly_averages(summaries: Sequence[DailyNutritionSummary]) -> PeriodAverages:
    """Average the daily totals over every day in the period."""
    days = max(len(summaries), 1)
    return PeriodAverages(
        days=len(summaries),
        avg_calories=round_calories(
            sum(summary.total_calories for summary in summaries) / days
        ),
        avg_protein=round_grams(
            sum(summary.total_protein for summary in summaries) / days
        ),
        avg_carbs=round_grams(sum(summary.total_carbs for summary in summaries) / days),
        avg_fat=round_grams(sum(summary.total_fat for summary in summaries) / days),
        logged_days=sum(1 for summary in summaries if summary.meal_count),
    )


def _sum_entries(entries: Sequence[MealEntry]) -> NutrientTotals:
    calories = protein = carbs = fat = fiber = sugar = sodium = 0.0
    for entry in entries:
        nutrients = entry.nutrients
        calories += nutrients.calories
        protein += nutrients.protein
        carbs += nutrients.carbs
        fat += nutrients.fat
        fiber += nutrients.fiber or 0.0
        sugar += nutrients.sugar or 0.0
        sodium += nutrients.sodium or 0.0
    return NutrientTotals(
        calories=round_calories(calories),
        protein=round_grams(protein),
        carbs=round_grams(carbs),
        fat=round_grams(fat),
        fiber=round_grams(fiber),
        sugar=round_grams(sugar),
        sodium=round_sodium(sodium),
    )

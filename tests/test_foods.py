"""Tests for food records and their conversions."""

from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from diet_tracker.domain.foods import (
    UNKNOWN_PRODUCT_NAME,
    FoodSource,
    NormalizedFood,
    custom_food_record,
    is_stale,
    normalize,
    record_from_off_product,
)
from diet_tracker.domain.local_foods import default_foods, get_local_food
from diet_tracker.domain.nutrition import NutrientValues
from tests.conftest import cached_record, off_product

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def test_staleness_window_is_seven_days() -> None:
    old = cached_record("Granola", last_fetched=NOW - timedelta(days=8))
    recent = cached_record("Granola", last_fetched=NOW - timedelta(days=6))
    never = replace(recent, last_fetched=None)

    assert is_stale(old, NOW)
    assert not is_stale(recent, NOW)
    assert is_stale(never, NOW)


def test_normalize_scales_per_100g_to_serving_weight() -> None:
    record = replace(cached_record("Granola", record_id="f-1"), serving_weight_g=50)

    food = normalize(record)

    assert food.id == "f-1"
    assert food.nutrients.calories == 100
    assert food.nutrients.protein == 5
    assert food.nutrients.carbs == 10
    assert food.nutrients.fat == 2.5


def test_normalize_requires_a_stored_id() -> None:
    with pytest.raises(ValueError):
        normalize(cached_record("Granola"))


def test_record_from_off_product_maps_nutriments() -> None:
    product = off_product(
        "3017620422003", "Hazelnut Spread", **{"energy-kcal_100g": 539.6}
    )
    product["nutriments"]["fiber_100g"] = 0

    record = record_from_off_product(product, NOW)

    assert record.source == FoodSource.OPENFOODFACTS
    assert record.calories_per_100g == 540
    assert record.protein_per_100g == 10
    assert record.fiber_per_100g is None
    assert record.barcode == "3017620422003"
    assert record.external_id == "3017620422003"
    assert record.brand == "Acme"
    assert record.serving_weight_g == 100
    assert record.last_fetched == NOW


def test_record_from_off_product_defaults_missing_name() -> None:
    product = off_product("1", "")

    assert record_from_off_product(product, NOW).name == UNKNOWN_PRODUCT_NAME


def test_record_from_off_product_without_code_is_rejected() -> None:
    product = off_product("", "Nameless")

    with pytest.raises(ValueError):
        record_from_off_product(product, NOW)


def test_custom_food_record_keeps_stated_serving_values() -> None:
    food = NormalizedFood(
        id="custom-1",
        name="Grandma's Curry",
        source=FoodSource.CUSTOM,
        serving="1 bowl",
        nutrients=NutrientValues(calories=350.4, protein=12, carbs=40, fat=15),
    )

    record = replace(custom_food_record(food), id="row-1")
    restored = normalize(record)

    assert record.serving_weight_g == 100
    assert restored.nutrients.calories == 350
    assert restored.nutrients.protein == 12
    assert restored.serving == "1 bowl"
    assert restored.source == FoodSource.CUSTOM


def test_dedupe_key_ignores_case_and_missing_brand() -> None:
    nutrients = NutrientValues(calories=1, protein=0, carbs=0, fat=0)
    first = NormalizedFood(
        id="a", name="Oats", source=FoodSource.LOCAL, serving="1", nutrients=nutrients
    )
    second = replace(first, id="b", name="OATS", brand="")

    assert first.dedupe_key() == second.dedupe_key()


def test_custom_drafts_have_no_persisted_identity() -> None:
    nutrients = NutrientValues(calories=1, protein=0, carbs=0, fat=0)
    draft = NormalizedFood(
        id="custom-123",
        name="Soup",
        source=FoodSource.CUSTOM,
        serving="1",
        nutrients=nutrients,
    )

    assert not draft.has_persisted_identity
    assert replace(draft, id="7d0e").has_persisted_identity


def test_local_catalogue_lookups() -> None:
    banana = get_local_food("local-banana")

    assert banana is not None
    assert banana.nutrients.calories == 105
    assert get_local_food("local-missing") is None
    assert default_foods()[0] == banana

"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from types import SimpleNamespace

from diet_tracker.adapters.supabase_auth_gateway import SupabaseAuthGateway
from diet_tracker.adapters.supabase_feedback_repository import (
    SupabaseFeedbackRepository,
)
from diet_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from diet_tracker.adapters.supabase_meal_entry_repository import (
    SupabaseMealEntryRepository,
)
from diet_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from diet_tracker.adapters.supabase_water_repository import SupabaseWaterRepository
from diet_tracker.domain.feedback import FeedbackSubmission
from diet_tracker.domain.foods import FoodSource
from diet_tracker.domain.meals import MealEntryChanges, MealType, NewMealEntry
from diet_tracker.domain.nutrition import NutrientValues
from diet_tracker.domain.profiles import GoalType
from diet_tracker.domain.water import WaterEntry
from tests.conftest import cached_record


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_on_conflict: str | None = None
    last_order: tuple[str, bool] | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def in_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def or_(self, filters: str) -> "FakeTable":
        self.last_filters.append(("or", filters))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeAuth:
    users: dict[str, str] = field(default_factory=dict)

    def get_user(self, token: str):  # type: ignore[no-untyped-def]
        user_id = self.users.get(token)
        user = SimpleNamespace(id=user_id) if user_id else None
        return SimpleNamespace(user=user)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)
    auth: FakeAuth = field(default_factory=FakeAuth)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _food_row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": "food-1",
        "name": "Peanut Butter",
        "brand": "Acme",
        "source": "openfoodfacts",
        "barcode": "111",
        "external_id": "111",
        "calories_per_100g": 588,
        "protein_per_100g": "25",
        "carbs_per_100g": 20,
        "fat_per_100g": 50,
        "fiber_per_100g": None,
        "serving_size": "2 tbsp",
        "serving_weight_g": 32,
        "last_fetched": "2024-05-01T10:00:00",
    }
    row.update(overrides)
    return row


def _entry_row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": "entry-1",
        "user_id": "user-1",
        "food_id": "local-banana",
        "food_name": "Banana",
        "food_brand": None,
        "food_source": "local",
        "meal_type": "breakfast",
        "serving_size": 2,
        "serving_unit": "medium",
        "calories": 210,
        "protein": 2.6,
        "carbs": 54,
        "fat": 0.8,
        "logged_at": "2024-05-01T06:00:00+00:00",
        "ist_date": "2024-05-01",
        "created_at": "2024-05-01T06:00:01+00:00",
        "food_snapshot": {"name": "Banana", "calories": 105},
    }
    row.update(overrides)
    return row


def test_food_repository_search_and_lookup() -> None:
    client = FakeSupabaseClient()
    foods = client.table("foods")
    foods.queue("select", [_food_row()])
    foods.queue("select", [])

    repository = SupabaseFoodRepository(client)
    results = repository.search(" peanut, (butter) ", limit=8)
    missing = repository.get_by_barcode("999")

    assert results[0].protein_per_100g == 25
    assert results[0].fiber_per_100g is None
    assert results[0].serving_weight_g == 32
    assert results[0].last_fetched == datetime(2024, 5, 1, 10, 0, tzinfo=UTC)
    assert foods.last_filters[0] == (
        "or",
        "name.ilike.%peanut   butter %,brand.ilike.%peanut   butter %",
    )
    assert missing is None


def test_food_repository_upsert_uses_natural_key() -> None:
    client = FakeSupabaseClient()
    foods = client.table("foods")
    foods.queue("upsert", [_food_row()])

    stored = SupabaseFoodRepository(client).upsert(
        cached_record("Peanut Butter", external_id="111", barcode="111")
    )

    assert stored.id == "food-1"
    assert foods.last_on_conflict == "external_id,source"
    assert foods.last_payload["source"] == "openfoodfacts"
    assert "updated_at" in foods.last_payload


def test_food_repository_write_without_data_raises() -> None:
    client = FakeSupabaseClient()

    try:
        SupabaseFoodRepository(client).create_custom(
            cached_record("Curry", source=FoodSource.CUSTOM)
        )
    except RuntimeError as exc:
        assert "custom food" in str(exc)
    else:
        raise AssertionError("Expected RuntimeError")


def test_food_repository_recent_foods_are_newest_first() -> None:
    client = FakeSupabaseClient()
    foods = client.table("foods")
    foods.queue("select", [_food_row(), _food_row(id="food-2", source="custom")])

    recent = SupabaseFoodRepository(client).list_recent(limit=5)

    assert [record.id for record in recent] == ["food-1", "food-2"]
    assert foods.last_order == ("updated_at", True)
    assert foods.last_filters == [("source", ["openfoodfacts", "custom"])]


def test_meal_entry_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    entries = client.table("meal_entries")
    entries.queue("insert", [_entry_row()])
    entries.queue("select", [_entry_row()])

    repository = SupabaseMealEntryRepository(client)
    created = repository.create_entry(
        NewMealEntry(
            user_id="user-1",
            food_id="local-banana",
            food_name="Banana",
            food_brand=None,
            food_source=FoodSource.LOCAL,
            food_image=None,
            meal_type=MealType.BREAKFAST,
            serving_size=2,
            serving_unit="medium",
            nutrients=NutrientValues(calories=210, protein=2.6, carbs=54, fat=0.8),
            logged_at=datetime(2024, 5, 1, 6, 0, tzinfo=UTC),
            ist_date="2024-05-01",
            food_snapshot={"name": "Banana"},
        )
    )
    listed = repository.list_entries_for_day("user-1", "2024-05-01")

    assert entries.last_payload is not None
    assert created.nutrients.calories == 210
    assert created.meal_type == MealType.BREAKFAST
    assert created.food_snapshot["calories"] == 105
    assert listed[0].logged_at == datetime(2024, 5, 1, 6, 0, tzinfo=UTC)
    assert entries.last_filters[-2:] == [
        ("user_id", "user-1"),
        ("ist_date", "2024-05-01"),
    ]
    assert entries.last_order == ("logged_at", False)


def test_meal_entry_repository_update_payload() -> None:
    client = FakeSupabaseClient()
    entries = client.table("meal_entries")
    entries.queue("update", [_entry_row(serving_size=3, calories=315)])

    repository = SupabaseMealEntryRepository(client)
    updated = repository.update_entry(
        "entry-1",
        MealEntryChanges(serving_size=3),
        NutrientValues(calories=315, protein=3.9, carbs=81, fat=1.2),
    )
    missing = repository.update_entry(
        "nope", MealEntryChanges(meal_type=MealType.SNACK), None
    )

    assert updated.serving_size == 3
    assert updated.nutrients.calories == 315
    assert missing is None
    assert entries.last_payload == {"meal_type": "snack"}


def test_profile_repository_maps_column_names() -> None:
    client = FakeSupabaseClient()
    profiles = client.table("user_profiles")
    row = {
        "user_id": "user-1",
        "full_name": "Asha",
        "height": 172.5,
        "weight": 64,
        "goal_type": "cutting",
        "daily_calories": 1800,
        "daily_protein": 180,
        "daily_carbs": 113,
        "daily_fat": 70,
        "activity_level": "moderate",
    }
    profiles.queue("update", [row])

    profile = SupabaseProfileRepository(client).update_profile(
        "user-1", {"height_cm": 172.5, "weight_kg": 64}
    )

    assert profiles.last_payload["height"] == 172.5
    assert profiles.last_payload["weight"] == 64
    assert "updated_at" in profiles.last_payload
    assert profile.height_cm == 172.5
    assert profile.goal_type == GoalType.CUTTING
    assert profile.targets.protein_g == 180


def test_water_repository_upserts_per_day() -> None:
    client = FakeSupabaseClient()
    water = client.table("water_entries")
    saved_row = {"user_id": "user-1", "date": "2024-05-01", "glasses_consumed": 5}
    water.queue("upsert", [saved_row])
    water.queue("select", [saved_row])

    repository = SupabaseWaterRepository(client)
    saved = repository.upsert_entry(
        WaterEntry(user_id="user-1", day=date(2024, 5, 1), glasses_consumed=5)
    )
    fetched = repository.get_entry("user-1", date(2024, 5, 1))

    assert water.last_on_conflict == "user_id,date"
    assert saved.glasses_consumed == 5
    assert fetched.day == date(2024, 5, 1)


def test_feedback_repository_insert_and_filtered_listing() -> None:
    client = FakeSupabaseClient()
    feedback = client.table("user_feedback")
    feedback.queue(
        "insert",
        [
            {
                "id": "fb-1",
                "user_id": None,
                "rating": 4,
                "category": "General",
                "ist_date": "2024-05-01",
            }
        ],
    )

    repository = SupabaseFeedbackRepository(client)
    stored = repository.create_feedback(
        None,
        FeedbackSubmission(rating=4, category="General", message=" Nice app "),
        "2024-05-01",
    )
    repository.list_recent(10, user_id="user-1")

    assert stored.user_id is None
    assert feedback.last_payload["message"] == "Nice app"
    assert feedback.last_payload["feedback_type"] == "general"
    assert feedback.last_filters == [("user_id", "user-1")]
    assert feedback.last_order == ("created_at", True)


def test_auth_gateway_resolves_user_id() -> None:
    client = FakeSupabaseClient(auth=FakeAuth(users={"token": "user-1"}))
    gateway = SupabaseAuthGateway(client)

    assert gateway.get_user_id("token") == "user-1"
    assert gateway.get_user_id("other") is None

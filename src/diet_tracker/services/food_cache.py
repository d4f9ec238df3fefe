"""Persisted food cache with a freshness policy."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from diet_tracker.domain.foods import (
    DEFAULT_MAX_AGE,
    CachedFoodRecord,
    NormalizedFood,
    custom_food_record,
    is_stale,
    normalize,
)

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for the foods table."""

    def search(self, query: str, limit: int) -> list[CachedFoodRecord]:
        """Return foods whose name or brand contains ``query``."""

    def get_food(self, food_id: str) -> CachedFoodRecord | None:
        """Return a food by id."""

    def get_by_external_id(
        self, external_id: str, source: str
    ) -> CachedFoodRecord | None:
        """Return the food stored under a remote natural key."""

    def get_by_barcode(self, barcode: str) -> CachedFoodRecord | None:
        """Return a food by barcode."""

    def upsert(self, record: CachedFoodRecord) -> CachedFoodRecord:
        """Insert or replace by ``(external_id, source)`` and return the row."""

    def create_custom(self, record: CachedFoodRecord) -> CachedFoodRecord:
        """Insert a user-entered food and return the row."""

    def list_recent(self, limit: int) -> list[CachedFoodRecord]:
        """Return the most recently updated foods."""


@dataclass
class FoodCacheService:
    """Reads and refreshes cached foods.

    Stale rows are refreshed and replaced, never reported as errors. Errors
    from the repository propagate; callers decide how to degrade.
    """

    repository: FoodRepository
    max_age: timedelta = DEFAULT_MAX_AGE

    def search(self, query: str, limit: int) -> list[NormalizedFood]:
        """Search cached foods and convert them to per-serving values."""
        records = self.repository.search(query.strip(), limit)
        return [normalize(record) for record in records[:limit]]

    def recent(self, limit: int) -> list[NormalizedFood]:
        """Return recently updated foods as per-serving values."""
        return [normalize(record) for record in self.repository.list_recent(limit)]

    def get(self, food_id: str) -> NormalizedFood | None:
        """Return a cached food by id."""
        record = self.repository.get_food(food_id)
        return normalize(record) if record else None

    def is_stale(self, record: CachedFoodRecord, now: datetime | None = None) -> bool:
        """Apply the freshness window to a record."""
        return is_stale(record, now or datetime.now(tz=UTC), self.max_age)

    def fresh_by_barcode(
        self, barcode: str, now: datetime | None = None
    ) -> NormalizedFood | None:
        """Return a cached food for ``barcode`` unless it is missing or stale."""
        record = self.repository.get_by_barcode(barcode)
        if record is None or self.is_stale(record, now):
            return None
        return normalize(record)

    def resolve_remote(
        self, fetched: CachedFoodRecord, now: datetime | None = None
    ) -> NormalizedFood:
        """Reuse the cached copy of a remote food, or store the fresh one."""
        external_id, source = fetched.natural_key()
        if external_id:
            cached = self.repository.get_by_external_id(external_id, source)
            if cached is not None and not self.is_stale(cached, now):
                return normalize(cached)
            if cached is not None:
                _logger.debug("Refreshing stale food %s/%s", source, external_id)
        return normalize(self.repository.upsert(fetched))

    def add_custom(self, food: NormalizedFood) -> NormalizedFood:
        """Persist a user-entered food and return it with its stored id."""
        return normalize(self.repository.create_custom(custom_food_record(food)))

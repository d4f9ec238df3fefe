"""Multi-source food search.

Results come from the curated local list, the persisted food cache and the
Open Food Facts API, merged in that order. The search never raises: a
failing source contributes nothing and the rest is still returned.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from diet_tracker.adapters.off_client import OpenFoodFactsClient
from diet_tracker.domain.foods import NormalizedFood, record_from_off_product
from diet_tracker.domain.local_foods import (
    LOCAL_FOODS,
    default_foods,
    get_local_food,
)
from diet_tracker.services.food_cache import FoodCacheService

_logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 3


def search_local_foods(
    query: str, foods: Iterable[NormalizedFood] = LOCAL_FOODS
) -> list[NormalizedFood]:
    """Match curated foods by name.

    A food matches when its name contains the whole query, or any query word
    longer than two characters. Names starting with the query come first,
    then alphabetical order.
    """
    term = query.strip().casefold()
    if not term:
        return []
    words = [word for word in term.split() if len(word) >= MIN_WORD_LENGTH]

    def matches(food: NormalizedFood) -> bool:
        name = food.name.casefold()
        return term in name or any(word in name for word in words)

    return sorted(
        (food for food in foods if matches(food)),
        key=lambda food: (
            not food.name.casefold().startswith(term),
            food.name.casefold(),
        ),
    )


def merge_unique(
    *sources: Iterable[NormalizedFood], limit: int
) -> list[NormalizedFood]:
    """Concatenate result lists, dropping repeated ``(name, brand)`` pairs."""
    seen: set[tuple[str, str]] = set()
    merged: list[NormalizedFood] = []
    for source in sources:
        for food in source:
            key = food.dedupe_key()
            if key in seen:
                continue
            seen.add(key)
            merged.append(food)
            if len(merged) >= limit:
                return merged
    return merged


@dataclass
class FoodSearchService:
    """Search foods across local, cached and remote sources."""

    cache: FoodCacheService
    off_client: OpenFoodFactsClient
    cache_limit: int = 8
    remote_limit: int = 5
    result_limit: int = 12
    remote_min_query_length: int = 3
    remote_timeout_seconds: float = 3.0

    async def search(self, query: str) -> list[NormalizedFood]:
        """Return deduplicated foods for ``query``, best matches first."""
        term = query.strip()
        if not term:
            return self.popular()

        local_results = search_local_foods(term)
        cache_results = self._search_cache(term)
        remote_results: list[NormalizedFood] = []
        if len(term) >= self.remote_min_query_length:
            remote_results = await self._search_remote(term)

        return merge_unique(
            local_results,
            cache_results,
            remote_results,
            limit=self.result_limit,
        )

    def popular(self) -> list[NormalizedFood]:
        """Return the fallback list shown for an empty query."""
        try:
            recent = self.cache.recent(self.cache_limit)
        except Exception as exc:
            _logger.warning("Recent foods unavailable: %s", exc)
            recent = []
        return merge_unique(default_foods(), recent, limit=self.result_limit)

    def get_food(self, food_id: str) -> NormalizedFood | None:
        """Return a curated or cached food by id."""
        local = get_local_food(food_id)
        if local is not None:
            return local
        try:
            return self.cache.get(food_id)
        except Exception as exc:
            _logger.warning("Food lookup failed for %s: %s", food_id, exc)
            return None

    async def lookup_barcode(self, barcode: str) -> NormalizedFood | None:
        """Find a food by barcode, from the cache first and then remotely."""
        code = barcode.strip()
        if not code:
            return None
        try:
            cached = self.cache.fresh_by_barcode(code)
        except Exception as exc:
            _logger.warning("Barcode cache lookup failed for %s: %s", code, exc)
            cached = None
        if cached is not None:
            return cached
        try:
            product = await asyncio.wait_for(
                self.off_client.get_product(code),
                timeout=self.remote_timeout_seconds,
            )
            if product is None:
                return None
            record = record_from_off_product(product, datetime.now(tz=UTC))
            return self.cache.resolve_remote(record)
        except Exception as exc:
            _logger.warning("Barcode lookup failed for %s: %s", code, exc)
            return None

    def _search_cache(self, term: str) -> list[NormalizedFood]:
        try:
            return self.cache.search(term, self.cache_limit)
        except Exception as exc:
            _logger.warning("Food cache search failed for %r: %s", term, exc)
            return []

    async def _search_remote(self, term: str) -> list[NormalizedFood]:
        try:
            return await asyncio.wait_for(
                self._fetch_remote(term), timeout=self.remote_timeout_seconds
            )
        except TimeoutError:
            _logger.warning(
                "Remote food search timed out after %ss for %r",
                self.remote_timeout_seconds,
                term,
            )
        except Exception as exc:
            _logger.warning("Remote food search failed for %r: %s", term, exc)
        return []

    async def _fetch_remote(self, term: str) -> list[NormalizedFood]:
        products = await self.off_client.search_products(
            term, page_size=self.remote_limit
        )
        fetched_at = datetime.now(tz=UTC)
        results: list[NormalizedFood] = []
        for product in products[: self.remote_limit]:
            try:
                record = record_from_off_product(product, fetched_at)
            except ValueError:
                continue
            try:
                results.append(self.cache.resolve_remote(record, fetched_at))
            except Exception as exc:
                _logger.warning(
                    "Could not cache remote food %s: %s", record.external_id, exc
                )
        return results

"""Debounced, supersedable search requests.

Each caller (usually one user session) has at most one current request. A
request only publishes results if no newer request from the same caller
arrived while it was waiting or searching. Once a caller has nothing in
flight it is forgotten, so a client whose request counter restarts (a page
reload) is served normally.
"""

import asyncio
from dataclasses import dataclass, field
from itertools import count

from diet_tracker.domain.foods import NormalizedFood
from diet_tracker.services.food_search import FoodSearchService


@dataclass(frozen=True)
class SearchOutcome:
    """Result of one search request."""

    request_id: int
    query: str
    results: list[NormalizedFood]
    superseded: bool = False


@dataclass
class SearchCoordinator:
    """Debounces searches per caller and drops superseded ones."""

    search_service: FoodSearchService
    debounce_seconds: float = 0.3
    _in_flight: dict[str, int] = field(default_factory=dict)
    _counter: "count[int]" = field(default_factory=lambda: count(1))

    def in_flight_request_id(self, caller: str) -> int | None:
        """Return the id of the caller's current in-flight request."""
        return self._in_flight.get(caller)

    async def search(
        self, caller: str, query: str, request_id: int | None = None
    ) -> SearchOutcome:
        """Run ``query`` for ``caller`` unless a newer request supersedes it.

        Callers that do not track ids get one assigned from a global counter.
        An explicit id not above the one currently in flight is superseded
        at once.
        """
        if request_id is None:
            request_id = next(self._counter)
        current = self._in_flight.get(caller)
        if current is not None and request_id <= current:
            return self._superseded(request_id, query)
        self._in_flight[caller] = request_id
        try:
            if self.debounce_seconds > 0:
                await asyncio.sleep(self.debounce_seconds)
            if not self._is_current(caller, request_id):
                return self._superseded(request_id, query)

            results = await self.search_service.search(query)
            if not self._is_current(caller, request_id):
                return self._superseded(request_id, query)
            return SearchOutcome(request_id=request_id, query=query, results=results)
        finally:
            if self._is_current(caller, request_id):
                del self._in_flight[caller]

    def _is_current(self, caller: str, request_id: int) -> bool:
        return self._in_flight.get(caller) == request_id

    @staticmethod
    def _superseded(request_id: int, query: str) -> SearchOutcome:
        return SearchOutcome(
            request_id=request_id, query=query, results=[], superseded=True
        )

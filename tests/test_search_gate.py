"""Tests for debounced search coordination."""

import asyncio

from diet_tracker.services.food_cache import FoodCacheService
from diet_tracker.services.food_search import FoodSearchService
from diet_tracker.services.search_gate import SearchCoordinator
from tests.conftest import FakeOffClient, InMemoryFoodRepository


def _coordinator(debounce_seconds: float = 0) -> SearchCoordinator:
    search_service = FoodSearchService(
        cache=FoodCacheService(InMemoryFoodRepository()),
        off_client=FakeOffClient(),
    )
    return SearchCoordinator(search_service, debounce_seconds=debounce_seconds)


def test_newer_request_supersedes_pending_one() -> None:
    coordinator = _coordinator(debounce_seconds=0.05)

    async def scenario():  # type: ignore[no-untyped-def]
        first = asyncio.create_task(coordinator.search("user-1", "ban"))
        await asyncio.sleep(0)
        second = asyncio.create_task(coordinator.search("user-1", "banana"))
        return await asyncio.gather(first, second)

    first, second = asyncio.run(scenario())

    assert first.superseded
    assert first.results == []
    assert not second.superseded
    assert second.results[0].name == "Banana"
    assert coordinator.in_flight_request_id("user-1") is None


def test_older_request_arriving_while_newer_is_in_flight_is_dropped() -> None:
    coordinator = _coordinator(debounce_seconds=0.05)

    async def scenario():  # type: ignore[no-untyped-def]
        latest = asyncio.create_task(
            coordinator.search("user-1", "apple", request_id=5)
        )
        await asyncio.sleep(0)
        in_flight = coordinator.in_flight_request_id("user-1")
        stale = await coordinator.search("user-1", "app", request_id=3)
        return await latest, stale, in_flight

    latest, stale, in_flight = asyncio.run(scenario())

    assert in_flight == 5
    assert not latest.superseded
    assert stale.superseded
    assert stale.request_id == 3


def test_restarted_request_counter_is_served_once_idle() -> None:
    coordinator = _coordinator()

    for request_id in range(1, 21):
        asyncio.run(coordinator.search("user-1", "banana", request_id=request_id))
    after_reload = asyncio.run(
        coordinator.search("user-1", "banana", request_id=1)
    )

    assert not after_reload.superseded
    assert after_reload.results[0].name == "Banana"
    assert coordinator.in_flight_request_id("user-1") is None


def test_callers_do_not_supersede_each_other() -> None:
    coordinator = _coordinator(debounce_seconds=0.01)

    async def scenario():  # type: ignore[no-untyped-def]
        return await asyncio.gather(
            coordinator.search("user-1", "oats"),
            coordinator.search("user-2", "oats"),
        )

    first, second = asyncio.run(scenario())

    assert not first.superseded
    assert not second.superseded
    assert coordinator.in_flight_request_id("user-1") is None
    assert coordinator.in_flight_request_id("user-2") is None

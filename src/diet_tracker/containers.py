"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from zoneinfo import ZoneInfo

from supabase import create_client

from diet_tracker.adapters.off_client import (
    HttpxOpenFoodFactsClient,
    OpenFoodFactsClient,
)
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
from diet_tracker.adapters.widget_check import HttpxScriptChecker
from diet_tracker.config import Settings
from diet_tracker.domain.feedback import WidgetHandle, WidgetUnavailable
from diet_tracker.services.auth import AuthService
from diet_tracker.services.feedback import FeedbackService, FeedbackWidgetService
from diet_tracker.services.food_cache import FoodCacheService
from diet_tracker.services.food_search import FoodSearchService
from diet_tracker.services.meals import MealLogService
from diet_tracker.services.profiles import ProfileService
from diet_tracker.services.search_gate import SearchCoordinator
from diet_tracker.services.summaries import SummaryService
from diet_tracker.services.water import WaterService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    timezone: ZoneInfo
    off_client: OpenFoodFactsClient
    search_service: FoodSearchService
    search_coordinator: SearchCoordinator
    meal_log_service: MealLogService
    summary_service: SummaryService
    auth_service: AuthService
    profile_service: ProfileService
    water_service: WaterService
    feedback_service: FeedbackService
    widget_service: FeedbackWidgetService
    close_resources: Callable[[], Awaitable[None]]
    widget: WidgetHandle | WidgetUnavailable | None = None


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    timezone = ZoneInfo(resolved_settings.civil_timezone)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_cache = FoodCacheService(
        SupabaseFoodRepository(supabase_client),
        max_age=timedelta(days=resolved_settings.food_cache_max_age_days),
    )
    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        user_agent=resolved_settings.off_user_agent,
    )
    search_service = FoodSearchService(
        cache=food_cache,
        off_client=off_client,
        cache_limit=resolved_settings.cache_search_limit,
        remote_limit=resolved_settings.remote_search_limit,
        result_limit=resolved_settings.search_result_limit,
        remote_min_query_length=resolved_settings.remote_search_min_query_length,
        remote_timeout_seconds=resolved_settings.remote_search_timeout_seconds,
    )
    search_coordinator = SearchCoordinator(
        search_service, debounce_seconds=resolved_settings.search_debounce_seconds
    )
    meal_log_service = MealLogService(
        repository=SupabaseMealEntryRepository(supabase_client),
        food_cache=food_cache,
        timezone=timezone,
    )
    summary_service = SummaryService(meal_log_service)
    auth_service = AuthService(SupabaseAuthGateway(supabase_client))
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    water_service = WaterService(SupabaseWaterRepository(supabase_client))
    feedback_service = FeedbackService(
        repository=SupabaseFeedbackRepository(supabase_client),
        timezone=timezone,
        support_email=resolved_settings.support_email,
    )
    script_checker = HttpxScriptChecker.create(resolved_settings.userback_script_url)
    widget_service = FeedbackWidgetService(
        token=resolved_settings.userback_token,
        script_url=resolved_settings.userback_script_url,
        support_email=resolved_settings.support_email,
        checker=script_checker,
    )

    async def close_resources() -> None:
        await off_client.close()
        await script_checker.close()

    return AppContainer(
        settings=resolved_settings,
        timezone=timezone,
        off_client=off_client,
        search_service=search_service,
        search_coordinator=search_coordinator,
        meal_log_service=meal_log_service,
        summary_service=summary_service,
        auth_service=auth_service,
        profile_service=profile_service,
        water_service=water_service,
        feedback_service=feedback_service,
        widget_service=widget_service,
        close_resources=close_resources,
    )

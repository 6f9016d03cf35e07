"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from macro_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from macro_tracker.adapters.supabase_log_repository import (
    SupabaseLogEntryRepository,
)
from macro_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from macro_tracker.adapters.supabase_stats_repository import SupabaseStatsRepository
from macro_tracker.config import Settings
from macro_tracker.services.analytics import AnalyticsService
from macro_tracker.services.foods import FoodService
from macro_tracker.services.logs import LogService
from macro_tracker.services.meals import MealService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_service: FoodService
    meal_service: MealService
    log_service: LogService
    analytics_service: AnalyticsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_service = FoodService(SupabaseFoodRepository(supabase_client))
    meal_service = MealService(
        food_service=food_service,
        repository=SupabaseMealRepository(supabase_client),
    )
    log_service = LogService(
        food_service=food_service,
        meal_service=meal_service,
        repository=SupabaseLogEntryRepository(supabase_client),
    )
    analytics_service = AnalyticsService(SupabaseStatsRepository(supabase_client))

    async def close_resources() -> None:
        supabase_client.postgrest.session.close()

    return AppContainer(
        settings=resolved_settings,
        food_service=food_service,
        meal_service=meal_service,
        log_service=log_service,
        analytics_service=analytics_service,
        close_resources=close_resources,
    )

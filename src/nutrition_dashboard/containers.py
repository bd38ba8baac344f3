"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrition_dashboard.adapters.supabase_meal_repository import (
    SupabaseMealRepository,
)
from nutrition_dashboard.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutrition_dashboard.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from nutrition_dashboard.config import Settings
from nutrition_dashboard.services.cache import InMemoryCache
from nutrition_dashboard.services.dashboard import NutritionDashboardService
from nutrition_dashboard.services.goals import NutritionGoalsService
from nutrition_dashboard.services.meals import MealService
from nutrition_dashboard.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_service: MealService
    goals_service: NutritionGoalsService
    user_settings_service: UserSettingsService
    dashboard_service: NutritionDashboardService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_service = MealService(
        repository=SupabaseMealRepository(supabase_client),
        retention_days=resolved_settings.meal_retention_days,
    )
    goals_service = NutritionGoalsService(
        repository=SupabaseProfileRepository(supabase_client),
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.goals_cache_ttl_seconds,
    )
    user_settings_service = UserSettingsService(
        SupabaseUserSettingsRepository(supabase_client)
    )
    dashboard_service = NutritionDashboardService(
        meal_service=meal_service,
        goals_service=goals_service,
        user_settings_service=user_settings_service,
        state_cache=InMemoryCache(),
        state_ttl_seconds=resolved_settings.dashboard_state_ttl_seconds,
    )
    return AppContainer(
        settings=resolved_settings,
        meal_service=meal_service,
        goals_service=goals_service,
        user_settings_service=user_settings_service,
        dashboard_service=dashboard_service,
    )

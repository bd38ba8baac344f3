"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from nutrition_dashboard.config import Settings
from nutrition_dashboard.containers import AppContainer
from nutrition_dashboard.domain.goals import NutritionTargets, UserProfile
from nutrition_dashboard.domain.meals import (
    FullNutritionData,
    MealNutrition,
    StoredMeal,
)
from nutrition_dashboard.services.cache import InMemoryCache
from nutrition_dashboard.services.dashboard import NutritionDashboardService
from nutrition_dashboard.services.goals import (
    NutritionGoalsService,
    NutritionProfileRepository,
)
from nutrition_dashboard.services.meals import MealRepository, MealService
from nutrition_dashboard.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)


def make_meal(  # noqa: PLR0913
    meal_id: str,
    timestamp: datetime | str,
    nutrition: MealNutrition | None = None,
    meal_type: str | None = None,
    name: str = "Meal",
    user_id: str = "user-1",
) -> StoredMeal:
    """Build a stored meal for tests."""
    return StoredMeal(
        id=meal_id,
        user_id=user_id,
        name=name,
        timestamp=timestamp,
        nutrition_data=nutrition,
        full_nutrition_data=FullNutritionData(meal_type=meal_type)
        if meal_type
        else None,
    )


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[str, StoredMeal] = field(default_factory=dict)
    list_error: Exception | None = None

    def list_meals(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[StoredMeal]:
        if self.list_error is not None:
            raise self.list_error
        return sorted(
            (
                meal
                for meal in self.meals.values()
                if meal.user_id == user_id and start <= meal.timestamp < end
            ),
            key=lambda meal: meal.timestamp,
        )

    def get_meal(self, user_id: str, meal_id: str) -> StoredMeal | None:
        meal = self.meals.get(meal_id)
        if meal is None or meal.user_id != user_id:
            return None
        return meal

    def create_meal(self, meal: StoredMeal) -> StoredMeal:
        self.meals[meal.id] = meal
        return meal

    def update_meal(self, meal: StoredMeal) -> StoredMeal:
        self.meals[meal.id] = meal
        return meal

    def delete_meal(self, user_id: str, meal_id: str) -> bool:
        if self.get_meal(user_id, meal_id) is None:
            return False
        del self.meals[meal_id]
        return True

    def delete_meals_before(self, user_id: str, cutoff: datetime) -> int:
        expired = [
            meal.id
            for meal in self.meals.values()
            if meal.user_id == user_id and meal.timestamp < cutoff
        ]
        for meal_id in expired:
            del self.meals[meal_id]
        return len(expired)


@dataclass
class InMemoryProfileRepository(NutritionProfileRepository):
    """In-memory goal source repository that counts lookups."""

    targets: dict[str, NutritionTargets] = field(default_factory=dict)
    profiles: dict[str, UserProfile] = field(default_factory=dict)
    error: Exception | None = None
    target_calls: int = 0
    profile_calls: int = 0

    def get_nutrition_targets(self, user_id: str) -> NutritionTargets | None:
        self.target_calls += 1
        if self.error is not None:
            raise self.error
        return self.targets.get(user_id)

    def save_nutrition_targets(self, targets: NutritionTargets) -> NutritionTargets:
        self.targets[targets.user_id] = targets
        return targets

    def get_user_profile(self, user_id: str) -> UserProfile | None:
        self.profile_calls += 1
        return self.profiles.get(user_id)

    def save_user_profile(self, profile: UserProfile) -> UserProfile:
        self.profiles[profile.user_id] = profile
        return profile


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    timezones: dict[str, str] = field(default_factory=dict)

    def get_timezone(self, user_id: str) -> str | None:
        return self.timezones.get(user_id)

    def set_timezone(self, user_id: str, timezone_name: str) -> None:
        self.timezones[user_id] = timezone_name


@dataclass
class FakeClock:
    """Controllable clock for cache expiry tests."""

    now: datetime = field(default_factory=lambda: datetime(2024, 5, 1, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def todays_meal(
    meal_id: str,
    hour: int,
    nutrition: MealNutrition | None = None,
    meal_type: str | None = None,
) -> StoredMeal:
    """Build a meal logged today at the given UTC hour."""
    today = datetime.now(tz=UTC).replace(minute=0, second=0, microsecond=0)
    logged_at = today.replace(hour=hour)
    return make_meal(meal_id, logged_at, nutrition=nutrition, meal_type=meal_type)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
    )


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def container(
    settings: Settings,
    meal_repository: InMemoryMealRepository,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    meal_service = MealService(meal_repository)
    goals_service = NutritionGoalsService(
        repository=profile_repository,
        cache=InMemoryCache(),
    )
    user_settings_service = UserSettingsService(InMemoryUserSettingsRepository())
    dashboard_service = NutritionDashboardService(
        meal_service=meal_service,
        goals_service=goals_service,
        user_settings_service=user_settings_service,
        state_cache=InMemoryCache(),
    )
    return AppContainer(
        settings=settings,
        meal_service=meal_service,
        goals_service=goals_service,
        user_settings_service=user_settings_service,
        dashboard_service=dashboard_service,
    )

"""Meal recording service."""

from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import uuid4
from zoneinfo import ZoneInfo

from nutrition_dashboard.domain.meals import (
    FullNutritionData,
    MealNutrition,
    StoredMeal,
)
from nutrition_dashboard.domain.view_models import NutritionSummary
from nutrition_dashboard.services.meal_types import to_local_datetime

_UPDATABLE_FIELDS = frozenset(
    {"name", "notes", "image_url", "nutrition_data", "full_nutrition_data"}
)


class MealRepository(Protocol):
    """Persistence interface for recorded meals."""

    def list_meals(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[StoredMeal]:
        """Return meals logged in ``[start, end)`` ordered by time."""

    def get_meal(self, user_id: str, meal_id: str) -> StoredMeal | None:
        """Return a meal by id."""

    def create_meal(self, meal: StoredMeal) -> StoredMeal:
        """Persist a new meal and return it."""

    def update_meal(self, meal: StoredMeal) -> StoredMeal:
        """Persist changes to an existing meal."""

    def delete_meal(self, user_id: str, meal_id: str) -> bool:
        """Delete a meal; return True when a row was removed."""

    def delete_meals_before(self, user_id: str, cutoff: datetime) -> int:
        """Delete meals logged before ``cutoff``; return how many were removed."""


@dataclass
class MealService:
    """Service for recording meals and reading today's log."""

    repository: MealRepository
    retention_days: int = 30

    def get_todays_meals(self, user_id: str, timezone_name: str) -> list[StoredMeal]:
        """Return meals whose local date is today in the user's timezone."""
        tz = ZoneInfo(timezone_name)
        now = datetime.now(tz=tz)
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)
        meals = self.repository.list_meals(
            user_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        return [
            meal
            for meal in meals
            if to_local_datetime(meal.timestamp, tz).date() == start.date()
        ]

    def get_todays_nutrition_summary(
        self, meals: list[StoredMeal]
    ) -> NutritionSummary:
        """Sum nutrition across meals; missing values count as zero."""
        return summarize_meals(meals)

    def get_meal(self, user_id: str, meal_id: str) -> StoredMeal | None:
        """Return a single meal."""
        return self.repository.get_meal(user_id, meal_id)

    def save_meal(  # noqa: PLR0913
        self,
        user_id: str,
        name: str,
        notes: str = "",
        nutrition_data: MealNutrition | None = None,
        full_nutrition_data: FullNutritionData | None = None,
        image_url: str | None = None,
    ) -> StoredMeal:
        """Record a meal now and prune meals past the retention window."""
        now = datetime.now(tz=UTC)
        meal = self.repository.create_meal(
            StoredMeal(
                id=str(uuid4()),
                user_id=user_id,
                name=name,
                timestamp=now,
                notes=notes,
                image_url=image_url,
                nutrition_data=nutrition_data,
                full_nutrition_data=full_nutrition_data,
            )
        )
        self.repository.delete_meals_before(
            user_id, now - timedelta(days=self.retention_days)
        )
        return meal

    def update_meal(
        self, user_id: str, meal_id: str, updates: dict[str, object]
    ) -> StoredMeal | None:
        """Apply updates to a meal; id and timestamp cannot change."""
        existing = self.repository.get_meal(user_id, meal_id)
        if existing is None:
            return None
        changes = {
            key: value for key, value in updates.items() if key in _UPDATABLE_FIELDS
        }
        return self.repository.update_meal(replace(existing, **changes))

    def delete_meal(self, user_id: str, meal_id: str) -> bool:
        """Delete a meal; return True when it existed."""
        return self.repository.delete_meal(user_id, meal_id)


def summarize_meals(meals: list[StoredMeal]) -> NutritionSummary:
    """Return nutrition totals across meals."""
    calories = protein = carbs = fat = 0.0
    for meal in meals:
        nutrition = meal.nutrition_data
        if nutrition is None:
            continue
        calories += nutrition.calories or 0.0
        protein += nutrition.protein or 0.0
        carbs += nutrition.carbs or 0.0
        fat += nutrition.fat or 0.0
    return NutritionSummary(calories=calories, protein=protein, carbs=carbs, fat=fat)

"""Supabase repository for recorded meals."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from nutrition_dashboard.domain.meals import (
    FullNutritionData,
    MealNutrition,
    StoredMeal,
)
from nutrition_dashboard.services.meals import MealRepository

_MEAL_COLUMNS = (
    "id, user_id, name, notes, image_url, logged_at, calories, protein, carbs, "
    "fat, meal_type, analysis"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def list_meals(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[StoredMeal]:
        """Return meals in the time range, oldest first."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", user_id)
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_meal(self, user_id: str, meal_id: str) -> StoredMeal | None:
        """Return a meal by id."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", user_id)
            .eq("id", meal_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_meal(self, meal: StoredMeal) -> StoredMeal:
        """Insert a meal row."""
        response = self.client.table("meals").insert(_to_row(meal)).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_row(response.data[0])

    def update_meal(self, meal: StoredMeal) -> StoredMeal:
        """Update a meal row in place."""
        payload = _to_row(meal)
        for immutable in ("id", "user_id", "logged_at"):
            payload.pop(immutable)
        response = (
            self.client.table("meals")
            .update(payload)
            .eq("user_id", meal.user_id)
            .eq("id", meal.id)
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to update meal {meal.id}")
        return _parse_row(response.data[0])

    def delete_meal(self, user_id: str, meal_id: str) -> bool:
        """Delete a meal row; True when one was removed."""
        response = (
            self.client.table("meals")
            .delete()
            .eq("user_id", user_id)
            .eq("id", meal_id)
            .execute()
        )
        return bool(response.data)

    def delete_meals_before(self, user_id: str, cutoff: datetime) -> int:
        """Delete meals older than the cutoff."""
        response = (
            self.client.table("meals")
            .delete()
            .eq("user_id", user_id)
            .lt("logged_at", cutoff.isoformat())
            .execute()
        )
        return len(response.data or [])


def _to_row(meal: StoredMeal) -> dict[str, object]:
    nutrition = meal.nutrition_data or MealNutrition()
    full = meal.full_nutrition_data
    logged_at = meal.timestamp
    return {
        "id": meal.id,
        "user_id": meal.user_id,
        "name": meal.name,
        "notes": meal.notes,
        "image_url": meal.image_url,
        "logged_at": logged_at.isoformat()
        if isinstance(logged_at, datetime)
        else logged_at,
        "calories": nutrition.calories,
        "protein": nutrition.protein,
        "carbs": nutrition.carbs,
        "fat": nutrition.fat,
        "meal_type": full.meal_type if full else None,
        "analysis": full.details if full else None,
    }


def _parse_row(row: dict[str, object]) -> StoredMeal:
    nutrition_values = {
        key: _optional_float(row.get(key))
        for key in ("calories", "protein", "carbs", "fat")
    }
    nutrition = (
        MealNutrition(**nutrition_values)
        if any(value is not None for value in nutrition_values.values())
        else None
    )
    meal_type = row.get("meal_type")
    analysis = row.get("analysis")
    full = (
        FullNutritionData(
            meal_type=str(meal_type) if meal_type else None,
            details=dict(analysis) if isinstance(analysis, dict) else {},
        )
        if meal_type or analysis
        else None
    )
    return StoredMeal(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        name=str(row.get("name") or ""),
        timestamp=datetime.fromisoformat(str(row["logged_at"])),
        notes=str(row.get("notes") or ""),
        image_url=row.get("image_url"),
        nutrition_data=nutrition,
        full_nutrition_data=full,
    )


def _optional_float(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)

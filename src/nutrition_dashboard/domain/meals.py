"""Domain models for recorded meals and their grouped display form."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class MealType(StrEnum):
    """Canonical meal type labels."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


@dataclass(frozen=True)
class MealNutrition:
    """Nutrition values recorded for a meal; any field may be missing."""

    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None


@dataclass(frozen=True)
class FullNutritionData:
    """Richer analysis attached to a meal."""

    meal_type: str | None = None
    details: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class StoredMeal:
    """Represents a meal as persisted by the meal store."""

    id: str
    user_id: str
    name: str
    timestamp: datetime | str
    notes: str = ""
    image_url: str | None = None
    nutrition_data: MealNutrition | None = None
    full_nutrition_data: FullNutritionData | None = None


@dataclass(frozen=True)
class NormalizedMealItem:
    """Display-ready meal with every nutrient filled in."""

    id: str
    name: str
    time: str
    calories: float
    protein: float
    carbs: float
    fat: float
    full_meal: StoredMeal


@dataclass
class MealGroup:
    """Meals sharing a meal type, in input order."""

    id: int
    type: str
    emoji: str
    count: int
    items: list[NormalizedMealItem]

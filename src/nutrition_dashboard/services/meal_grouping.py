"""Normalization and grouping of recorded meals for display."""

from collections.abc import Iterable
from datetime import tzinfo

from nutrition_dashboard.domain.meals import (
    MealGroup,
    MealNutrition,
    NormalizedMealItem,
    StoredMeal,
)
from nutrition_dashboard.services.meal_types import (
    meal_emoji,
    resolve_meal_type,
    to_local_datetime,
)

TIME_FORMAT = "%I:%M %p"


def normalize_meal(meal: StoredMeal, tz: tzinfo | None = None) -> NormalizedMealItem:
    """Convert a stored meal into a display-ready item.

    Nutrients are filled in one by one: a recorded value is kept as is
    (including zero) and a missing or non-numeric value becomes 0.
    """
    nutrition = meal.nutrition_data or MealNutrition()
    return NormalizedMealItem(
        id=meal.id,
        name=meal.name,
        time=to_local_datetime(meal.timestamp, tz).strftime(TIME_FORMAT),
        calories=_nutrient(nutrition.calories),
        protein=_nutrient(nutrition.protein),
        carbs=_nutrient(nutrition.carbs),
        fat=_nutrient(nutrition.fat),
        full_meal=meal,
    )


def group_meals(
    meals: Iterable[StoredMeal], tz: tzinfo | None = None
) -> list[MealGroup]:
    """Group meals by type in order of first appearance."""
    groups: list[MealGroup] = []
    by_type: dict[str, MealGroup] = {}
    for meal in meals:
        meal_type = resolve_meal_type(meal, tz)
        item = normalize_meal(meal, tz)
        group = by_type.get(meal_type)
        if group is not None:
            group.items.append(item)
            group.count = len(group.items)
            continue
        group = MealGroup(
            id=len(groups) + 1,
            type=meal_type,
            emoji=meal_emoji(meal_type),
            count=1,
            items=[item],
        )
        groups.append(group)
        by_type[meal_type] = group
    return groups


def _nutrient(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0.0
    return float(value)

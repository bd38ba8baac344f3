"""Builds the daily nutrition view model."""

from nutrition_dashboard.domain.goals import DEFAULT_DAILY_GOALS, UserNutritionGoals
from nutrition_dashboard.domain.meals import MealGroup
from nutrition_dashboard.domain.view_models import (
    MacroBreakdown,
    MacroProgress,
    NutritionSummary,
    NutritionViewModel,
)

_EMPTY_SUMMARY = NutritionSummary(calories=0, protein=0, carbs=0, fat=0)


def build_nutrition_view_model(
    summary: NutritionSummary,
    meals: list[MealGroup],
    goals: UserNutritionGoals | None = None,
) -> NutritionViewModel:
    """Combine daily totals, grouped meals and goals.

    Remaining calories never drop below zero; macro totals are reported
    as consumed so callers can tell when a goal was exceeded.
    """
    resolved = goals or DEFAULT_DAILY_GOALS
    return NutritionViewModel(
        calories_consumed=summary.calories,
        calories_goal=resolved.calories,
        calories_remaining=max(0, resolved.calories - summary.calories),
        macros=MacroBreakdown(
            protein=MacroProgress(current=summary.protein, goal=resolved.protein),
            carbs=MacroProgress(current=summary.carbs, goal=resolved.carbs),
            fat=MacroProgress(current=summary.fat, goal=resolved.fat),
        ),
        meals=meals,
    )


def empty_nutrition_view_model() -> NutritionViewModel:
    """Return the view shown before data loads or after a failed load."""
    return build_nutrition_view_model(_EMPTY_SUMMARY, [], DEFAULT_DAILY_GOALS)

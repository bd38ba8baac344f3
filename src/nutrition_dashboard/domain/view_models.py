"""View models consumed by the presentation layer."""

from dataclasses import dataclass

from nutrition_dashboard.domain.meals import MealGroup


@dataclass(frozen=True)
class NutritionSummary:
    """Totals consumed over a day."""

    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class MacroProgress:
    """Progress of a single macro against its goal."""

    current: float
    goal: float
    unit: str = "g"


@dataclass(frozen=True)
class MacroBreakdown:
    protein: MacroProgress
    carbs: MacroProgress
    fat: MacroProgress


@dataclass(frozen=True)
class NutritionViewModel:
    """Daily nutrition view: totals against goals plus grouped meals."""

    calories_consumed: float
    calories_goal: float
    calories_remaining: float
    macros: MacroBreakdown
    meals: list[MealGroup]


@dataclass(frozen=True)
class DashboardState:
    """Latest outcome of loading a user's nutrition dashboard."""

    is_loading: bool
    error: str | None
    nutrition: NutritionViewModel

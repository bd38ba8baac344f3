"""Domain models for daily nutrition goals and their persisted sources."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class UserNutritionGoals:
    """Daily calorie and macro targets."""

    calories: float
    protein: float
    carbs: float
    fat: float


DEFAULT_DAILY_GOALS = UserNutritionGoals(calories=2000, protein=120, carbs=250, fat=70)


@dataclass(frozen=True)
class NutritionTargets:
    """Explicit nutrition targets saved for a user."""

    user_id: str
    daily_calories: float
    target_protein: float
    target_carbs: float
    target_fat: float
    updated_at: datetime | None = None


@dataclass(frozen=True)
class UserProfile:
    """Profile collected during onboarding."""

    user_id: str
    name: str = ""
    age: int | None = None
    sex: str | None = None
    height: float | None = None
    weight: float | None = None
    activity_level: str | None = None
    goals: list[str] = field(default_factory=list)
    health_conditions: list[str] = field(default_factory=list)
    dietary_restrictions: list[str] = field(default_factory=list)
    daily_calories: float | None = None
    target_protein: float | None = None
    target_carbs: float | None = None
    target_fat: float | None = None

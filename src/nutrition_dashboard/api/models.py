"""Pydantic models for API request payloads."""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from nutrition_dashboard.domain.goals import UserNutritionGoals, UserProfile
from nutrition_dashboard.domain.meals import (
    FullNutritionData,
    MealNutrition,
    StoredMeal,
)


class NutritionPayload(BaseModel):
    """Nutrition values for a meal; omitted fields stay unknown."""

    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)

    def to_domain(self) -> MealNutrition:
        return MealNutrition(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
        )


class MealCreateRequest(BaseModel):
    """Payload for recording a meal."""

    name: str = Field(min_length=1)
    notes: str = ""
    image_url: str | None = None
    nutrition: NutritionPayload | None = None
    meal_type: str | None = None
    analysis: dict[str, Any] | None = None

    def full_nutrition_data(self) -> FullNutritionData | None:
        if self.meal_type is None and self.analysis is None:
            return None
        return FullNutritionData(meal_type=self.meal_type, details=self.analysis or {})


class MealUpdateRequest(BaseModel):
    """Partial update for a recorded meal."""

    name: str | None = Field(default=None, min_length=1)
    notes: str | None = None
    image_url: str | None = None
    nutrition: NutritionPayload | None = None
    meal_type: str | None = None
    analysis: dict[str, Any] | None = None

    @field_validator("name", "notes")
    @classmethod
    def reject_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("must not be null")
        return value

    def to_updates(self, current: StoredMeal) -> dict[str, object]:
        """Return the fields the client sent, merged onto the current meal."""
        sent = self.model_fields_set
        updates: dict[str, object] = {
            key: getattr(self, key)
            for key in ("name", "notes", "image_url")
            if key in sent
        }
        if "nutrition" in sent:
            updates["nutrition_data"] = (
                self.nutrition.to_domain() if self.nutrition else None
            )
        if sent & {"meal_type", "analysis"}:
            existing = current.full_nutrition_data or FullNutritionData()
            meal_type = self.meal_type if "meal_type" in sent else existing.meal_type
            details = existing.details
            if "analysis" in sent:
                details = self.analysis or {}
            updates["full_nutrition_data"] = FullNutritionData(
                meal_type=meal_type, details=details
            )
        return updates


class GoalsRequest(BaseModel):
    """Daily targets set explicitly by a user."""

    calories: float = Field(gt=0)
    protein: float = Field(gt=0)
    carbs: float = Field(gt=0)
    fat: float = Field(gt=0)

    def to_domain(self) -> UserNutritionGoals:
        return UserNutritionGoals(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
        )


class TimezoneRequest(BaseModel):
    """IANA timezone name for a user."""

    timezone: str


class ProfileRequest(BaseModel):
    """Onboarding profile; calorie and macro targets are optional."""

    name: str = ""
    age: int | None = Field(default=None, ge=0)
    sex: Literal["male", "female", "other"] | None = None
    height: float | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)
    activity_level: (
        Literal[
            "sedentary",
            "lightly_active",
            "moderately_active",
            "very_active",
            "extremely_active",
        ]
        | None
    ) = None
    goals: list[str] = Field(default_factory=list)
    health_conditions: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)
    daily_calories: float | None = Field(default=None, ge=0)
    target_protein: float | None = Field(default=None, ge=0)
    target_carbs: float | None = Field(default=None, ge=0)
    target_fat: float | None = Field(default=None, ge=0)

    def to_domain(self, user_id: str) -> UserProfile:
        return UserProfile(user_id=user_id, **self.model_dump())

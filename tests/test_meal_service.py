"""Tests for the meal service."""

from datetime import UTC, datetime, timedelta

from nutrition_dashboard.domain.meals import FullNutritionData, MealNutrition
from nutrition_dashboard.domain.view_models import NutritionSummary
from nutrition_dashboard.services.meals import MealService
from tests.conftest import InMemoryMealRepository, make_meal, todays_meal


def test_get_todays_meals_filters_other_days() -> None:
    repository = InMemoryMealRepository()
    now = datetime.now(tz=UTC)
    today = todays_meal("today", hour=12)
    repository.meals = {
        "today": today,
        "yesterday": make_meal("yesterday", now - timedelta(days=1)),
        "other-user": make_meal("other-user", today.timestamp, user_id="user-2"),
    }
    service = MealService(repository)

    meals = service.get_todays_meals("user-1", "UTC")

    assert [meal.id for meal in meals] == ["today"]


def test_get_todays_meals_ordered_by_time() -> None:
    repository = InMemoryMealRepository()
    repository.meals = {
        "late": todays_meal("late", hour=20),
        "early": todays_meal("early", hour=7),
    }
    service = MealService(repository)

    meals = service.get_todays_meals("user-1", "UTC")

    assert [meal.id for meal in meals] == ["early", "late"]


def test_summary_treats_missing_values_as_zero() -> None:
    meals = [
        make_meal(
            "1",
            datetime(2024, 5, 1, 8, tzinfo=UTC),
            MealNutrition(calories=200, protein=15, carbs=5, fat=12),
        ),
        make_meal(
            "2", datetime(2024, 5, 1, 9, tzinfo=UTC), MealNutrition(calories=100)
        ),
        make_meal("3", datetime(2024, 5, 1, 10, tzinfo=UTC)),
    ]
    service = MealService(InMemoryMealRepository())

    summary = service.get_todays_nutrition_summary(meals)

    assert summary == NutritionSummary(calories=300, protein=15, carbs=5, fat=12)


def test_save_meal_prunes_meals_past_retention() -> None:
    repository = InMemoryMealRepository()
    old = make_meal("old", datetime.now(tz=UTC) - timedelta(days=31))
    recent = make_meal("recent", datetime.now(tz=UTC) - timedelta(days=2))
    repository.meals = {"old": old, "recent": recent}
    service = MealService(repository)

    meal = service.save_meal(
        "user-1",
        "Greek yogurt",
        nutrition_data=MealNutrition(calories=120, protein=10),
        full_nutrition_data=FullNutritionData(meal_type="snack"),
    )

    assert meal.id in repository.meals
    assert meal.timestamp.tzinfo is not None
    assert "recent" in repository.meals
    assert "old" not in repository.meals


def test_update_meal_keeps_identity() -> None:
    repository = InMemoryMealRepository()
    original = todays_meal("1", hour=8)
    repository.meals = {"1": original}
    service = MealService(repository)

    updated = service.update_meal(
        "user-1",
        "1",
        {
            "name": "Pancakes",
            "nutrition_data": MealNutrition(calories=450),
            "id": "other",
            "timestamp": datetime(2000, 1, 1, tzinfo=UTC),
        },
    )

    assert updated is not None
    assert updated.id == "1"
    assert updated.timestamp == original.timestamp
    assert updated.name == "Pancakes"
    assert updated.nutrition_data == MealNutrition(calories=450)


def test_update_missing_meal_returns_none() -> None:
    service = MealService(InMemoryMealRepository())

    assert service.update_meal("user-1", "missing", {"name": "x"}) is None


def test_delete_meal_reports_success() -> None:
    repository = InMemoryMealRepository()
    repository.meals = {"1": todays_meal("1", hour=8)}
    service = MealService(repository)

    assert service.delete_meal("user-1", "1") is True
    assert service.delete_meal("user-1", "1") is False
    assert service.get_meal("user-1", "1") is None

"""FastAPI application factory."""

import logging
from dataclasses import asdict
from datetime import datetime
from zoneinfo import ZoneInfoNotFoundError

from fastapi import FastAPI, HTTPException, Request, Response, status

from nutrition_dashboard.api.admin import router as admin_router
from nutrition_dashboard.api.models import (
    GoalsRequest,
    MealCreateRequest,
    MealUpdateRequest,
    ProfileRequest,
    TimezoneRequest,
)
from nutrition_dashboard.app_logging import configure_logging
from nutrition_dashboard.containers import AppContainer
from nutrition_dashboard.domain.meals import StoredMeal
from nutrition_dashboard.domain.view_models import DashboardState


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/users/{user_id}/nutrition")
    async def get_nutrition(user_id: str, request: Request) -> dict[str, object]:
        """Reload and return the user's daily nutrition dashboard."""
        state_container: AppContainer = request.app.state.container
        state = await state_container.dashboard_service.load_nutrition_data(user_id)
        return _serialize_state(state)

    @app.get("/users/{user_id}/goals")
    async def get_goals(user_id: str, request: Request) -> dict[str, object]:
        """Return the user's resolved daily goals."""
        state_container: AppContainer = request.app.state.container
        goals = await state_container.goals_service.get_goals(user_id)
        return asdict(goals)

    @app.put("/users/{user_id}/goals")
    async def save_goals(
        user_id: str, payload: GoalsRequest, request: Request
    ) -> dict[str, object]:
        """Store explicit daily targets for the user."""
        state_container: AppContainer = request.app.state.container
        targets = await state_container.goals_service.save_targets(
            user_id, payload.to_domain()
        )
        logger.info("Saved nutrition targets for user %s", user_id)
        return asdict(targets)

    @app.put("/users/{user_id}/profile")
    async def save_profile(
        user_id: str, payload: ProfileRequest, request: Request
    ) -> dict[str, object]:
        """Store the user's onboarding profile."""
        state_container: AppContainer = request.app.state.container
        profile = await state_container.goals_service.save_profile(
            payload.to_domain(user_id)
        )
        logger.info("Saved user profile for user %s", user_id)
        return asdict(profile)

    @app.post("/users/{user_id}/meals", status_code=status.HTTP_201_CREATED)
    async def create_meal(
        user_id: str, payload: MealCreateRequest, request: Request
    ) -> dict[str, object]:
        """Record a meal for the user."""
        state_container: AppContainer = request.app.state.container
        meal = state_container.meal_service.save_meal(
            user_id=user_id,
            name=payload.name,
            notes=payload.notes,
            nutrition_data=(
                payload.nutrition.to_domain() if payload.nutrition else None
            ),
            full_nutrition_data=payload.full_nutrition_data(),
            image_url=payload.image_url,
        )
        return _serialize_meal(meal)

    @app.patch("/users/{user_id}/meals/{meal_id}")
    async def update_meal(
        user_id: str, meal_id: str, payload: MealUpdateRequest, request: Request
    ) -> dict[str, object]:
        """Apply a partial update to a recorded meal."""
        state_container: AppContainer = request.app.state.container
        meal_service = state_container.meal_service
        current = meal_service.get_meal(user_id, meal_id)
        if current is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        updated = meal_service.update_meal(
            user_id, meal_id, payload.to_updates(current)
        )
        if updated is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _serialize_meal(updated)

    @app.delete("/users/{user_id}/meals/{meal_id}")
    async def delete_meal(
        user_id: str, meal_id: str, request: Request
    ) -> dict[str, object]:
        """Delete a meal and return the refreshed dashboard."""
        state_container: AppContainer = request.app.state.container
        dashboard = state_container.dashboard_service
        deleted = await dashboard.handle_delete_meal(user_id, meal_id)
        if not deleted:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {
            "deleted": deleted,
            "dashboard": _serialize_state(dashboard.get_state(user_id)),
        }

    @app.put("/users/{user_id}/timezone", status_code=status.HTTP_204_NO_CONTENT)
    async def set_timezone(
        user_id: str, payload: TimezoneRequest, request: Request
    ) -> Response:
        """Store the user's timezone."""
        state_container: AppContainer = request.app.state.container
        try:
            state_container.user_settings_service.set_timezone(
                user_id, payload.timezone
            )
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise HTTPException(
                status_code=422,
                detail=f"Unknown timezone: {payload.timezone}",
            ) from exc
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


def _serialize_state(state: DashboardState) -> dict[str, object]:
    nutrition = asdict(state.nutrition)
    for group, source in zip(nutrition["meals"], state.nutrition.meals, strict=True):
        for item, meal_item in zip(group["items"], source.items, strict=True):
            item["full_meal"] = _serialize_meal(meal_item.full_meal)
    return {
        "is_loading": state.is_loading,
        "error": state.error,
        "nutrition": nutrition,
    }


def _serialize_meal(meal: StoredMeal) -> dict[str, object]:
    payload = asdict(meal)
    if isinstance(meal.timestamp, datetime):
        payload["timestamp"] = meal.timestamp.isoformat()
    return payload

"""Loads the daily nutrition dashboard for a user."""

import asyncio
import logging
from dataclasses import dataclass, replace

from nutrition_dashboard.domain.view_models import DashboardState
from nutrition_dashboard.services.cache import Cache
from nutrition_dashboard.services.goals import NutritionGoalsService
from nutrition_dashboard.services.meal_grouping import group_meals
from nutrition_dashboard.services.meals import MealService
from nutrition_dashboard.services.user_settings import UserSettingsService
from nutrition_dashboard.services.view_model import (
    build_nutrition_view_model,
    empty_nutrition_view_model,
)

_logger = logging.getLogger(__name__)


def initial_dashboard_state() -> DashboardState:
    """Return the state shown before the first load."""
    return DashboardState(
        is_loading=False, error=None, nutrition=empty_nutrition_view_model()
    )


@dataclass(frozen=True)
class _DashboardEntry:
    sequence: int
    state: DashboardState


@dataclass
class NutritionDashboardService:
    """Runs the meal pipeline and keeps the latest state per user.

    State lives in ``state_cache`` for ``state_ttl_seconds`` after the last
    write. Every load takes a sequence number; a load that finishes after a
    newer one has started leaves the stored state alone.
    """

    meal_service: MealService
    goals_service: NutritionGoalsService
    user_settings_service: UserSettingsService
    state_cache: Cache
    state_ttl_seconds: int = 3600

    def get_state(self, user_id: str) -> DashboardState:
        """Return the latest dashboard state for a user."""
        entry = self._get_entry(user_id)
        return entry.state if entry else initial_dashboard_state()

    async def load_nutrition_data(self, user_id: str) -> DashboardState:
        """Rebuild the user's dashboard from today's meals and goals."""
        current = self._get_entry(user_id)
        sequence = (current.sequence if current else 0) + 1
        self._set_entry(
            user_id, sequence, replace(self.get_state(user_id), is_loading=True)
        )

        state: DashboardState | None = None
        try:
            state = await self._build_state(user_id)
        finally:
            if self._is_latest(user_id, sequence):
                self._set_entry(
                    user_id,
                    sequence,
                    state or replace(self.get_state(user_id), is_loading=False),
                )

        if not self._is_latest(user_id, sequence):
            _logger.info(
                "Discarding stale nutrition load for user %s (sequence %s)",
                user_id,
                sequence,
            )
            return self.get_state(user_id)
        return state

    async def handle_delete_meal(self, user_id: str, meal_id: str) -> bool:
        """Delete a meal and reload the dashboard when it was removed."""
        try:
            deleted = await asyncio.to_thread(
                self.meal_service.delete_meal, user_id, meal_id
            )
        except Exception:
            _logger.exception("Failed to delete meal %s for user %s", meal_id, user_id)
            return False
        if deleted:
            await self.load_nutrition_data(user_id)
        return deleted

    async def _build_state(self, user_id: str) -> DashboardState:
        try:
            tz = await asyncio.to_thread(self.user_settings_service.get_zone, user_id)
            meals = await asyncio.to_thread(
                self.meal_service.get_todays_meals, user_id, tz.key
            )
            summary = self.meal_service.get_todays_nutrition_summary(meals)
            groups = group_meals(meals, tz)
            goals = await self.goals_service.get_goals(user_id)
        except Exception as exc:
            _logger.exception("Failed to load nutrition data for user %s", user_id)
            return DashboardState(
                is_loading=False,
                error=str(exc) or exc.__class__.__name__,
                nutrition=empty_nutrition_view_model(),
            )
        return DashboardState(
            is_loading=False,
            error=None,
            nutrition=build_nutrition_view_model(summary, groups, goals),
        )

    def _get_entry(self, user_id: str) -> _DashboardEntry | None:
        entry = self.state_cache.get(_state_key(user_id))
        return entry if isinstance(entry, _DashboardEntry) else None

    def _set_entry(self, user_id: str, sequence: int, state: DashboardState) -> None:
        self.state_cache.set(
            _state_key(user_id),
            _DashboardEntry(sequence=sequence, state=state),
            ttl_seconds=self.state_ttl_seconds,
        )

    def _is_latest(self, user_id: str, sequence: int) -> bool:
        entry = self._get_entry(user_id)
        return entry is None or entry.sequence == sequence


def _state_key(user_id: str) -> str:
    return f"dashboard:{user_id}"

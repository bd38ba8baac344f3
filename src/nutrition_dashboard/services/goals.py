"""Nutrition goal resolution with caching."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from nutrition_dashboard.domain.goals import (
    DEFAULT_DAILY_GOALS,
    NutritionTargets,
    UserNutritionGoals,
    UserProfile,
)
from nutrition_dashboard.services.cache import Cache

_logger = logging.getLogger(__name__)


class NutritionProfileRepository(Protocol):
    """Persistence interface for nutrition targets and user profiles."""

    def get_nutrition_targets(self, user_id: str) -> NutritionTargets | None:
        """Return saved nutrition targets for a user."""

    def save_nutrition_targets(self, targets: NutritionTargets) -> NutritionTargets:
        """Insert or replace a user's nutrition targets."""

    def get_user_profile(self, user_id: str) -> UserProfile | None:
        """Return the onboarding profile for a user."""

    def save_user_profile(self, profile: UserProfile) -> UserProfile:
        """Insert or replace a user's onboarding profile."""


@dataclass
class NutritionGoalsService:
    """Resolves a user's daily goals from targets, profile, or defaults.

    Resolved goals are cached per user for ``ttl_seconds``. Lookup failures
    degrade to the default goals and are not cached.
    """

    repository: NutritionProfileRepository
    cache: Cache
    ttl_seconds: int = 300

    async def get_goals(self, user_id: str | None) -> UserNutritionGoals:
        """Return the user's goals, falling back to defaults."""
        if not user_id:
            return DEFAULT_DAILY_GOALS
        cached = self.cache.get(_cache_key(user_id))
        if isinstance(cached, UserNutritionGoals):
            return cached

        try:
            goals = await self._load_goals(user_id)
        except Exception:
            _logger.exception("Failed to load nutrition goals for user %s", user_id)
            return DEFAULT_DAILY_GOALS

        self.cache.set(_cache_key(user_id), goals, ttl_seconds=self.ttl_seconds)
        return goals

    async def save_targets(
        self, user_id: str, goals: UserNutritionGoals
    ) -> NutritionTargets:
        """Persist explicit targets and drop the user's cached goals."""
        targets = await asyncio.to_thread(
            self.repository.save_nutrition_targets,
            NutritionTargets(
                user_id=user_id,
                daily_calories=goals.calories,
                target_protein=goals.protein,
                target_carbs=goals.carbs,
                target_fat=goals.fat,
                updated_at=datetime.now(tz=UTC),
            ),
        )
        self.clear_cache(user_id)
        return targets

    async def save_profile(self, profile: UserProfile) -> UserProfile:
        """Persist an onboarding profile and drop the user's cached goals."""
        saved = await asyncio.to_thread(self.repository.save_user_profile, profile)
        self.clear_cache(profile.user_id)
        return saved

    def clear_cache(self, user_id: str | None = None) -> None:
        """Forget cached goals for one user, or for everyone."""
        if user_id:
            self.cache.delete(_cache_key(user_id))
        else:
            self.cache.clear()

    async def _load_goals(self, user_id: str) -> UserNutritionGoals:
        targets = await asyncio.to_thread(
            self.repository.get_nutrition_targets, user_id
        )
        if targets is not None:
            return UserNutritionGoals(
                calories=targets.daily_calories,
                protein=targets.target_protein,
                carbs=targets.target_carbs,
                fat=targets.target_fat,
            )

        profile = await asyncio.to_thread(self.repository.get_user_profile, user_id)
        if profile is not None and (profile.daily_calories or 0) > 0:
            return _goals_from_profile(profile)
        return DEFAULT_DAILY_GOALS


def _goals_from_profile(profile: UserProfile) -> UserNutritionGoals:
    return UserNutritionGoals(
        calories=_or_default(profile.daily_calories, DEFAULT_DAILY_GOALS.calories),
        protein=_or_default(profile.target_protein, DEFAULT_DAILY_GOALS.protein),
        carbs=_or_default(profile.target_carbs, DEFAULT_DAILY_GOALS.carbs),
        fat=_or_default(profile.target_fat, DEFAULT_DAILY_GOALS.fat),
    )


def _or_default(value: float | None, default: float) -> float:
    return default if value is None else value


def _cache_key(user_id: str) -> str:
    return f"goals:{user_id}"

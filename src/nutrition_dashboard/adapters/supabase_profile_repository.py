"""Supabase repository for nutrition targets and user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutrition_dashboard.domain.goals import NutritionTargets, UserProfile
from nutrition_dashboard.services.goals import NutritionProfileRepository


@dataclass
class SupabaseProfileRepository(NutritionProfileRepository):
    """Supabase implementation for goal sources."""

    client: Client

    def get_nutrition_targets(self, user_id: str) -> NutritionTargets | None:
        """Return the user's saved targets."""
        response = (
            self.client.table("nutrition_targets")
            .select(
                "user_id, daily_calories, target_protein, target_carbs, target_fat, "
                "updated_at"
            )
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_targets(response.data[0])

    def save_nutrition_targets(self, targets: NutritionTargets) -> NutritionTargets:
        """Upsert the user's targets."""
        updated_at = targets.updated_at or datetime.now(tz=UTC)
        response = (
            self.client.table("nutrition_targets")
            .upsert(
                {
                    "user_id": targets.user_id,
                    "daily_calories": targets.daily_calories,
                    "target_protein": targets.target_protein,
                    "target_carbs": targets.target_carbs,
                    "target_fat": targets.target_fat,
                    "updated_at": updated_at.isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save nutrition targets")
        return _parse_targets(response.data[0])

    def get_user_profile(self, user_id: str) -> UserProfile | None:
        """Return the onboarding profile for a user."""
        response = (
            self.client.table("user_profiles")
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def save_user_profile(self, profile: UserProfile) -> UserProfile:
        """Upsert the onboarding profile for a user."""
        response = (
            self.client.table("user_profiles")
            .upsert(
                {
                    "user_id": profile.user_id,
                    "name": profile.name,
                    "age": profile.age,
                    "sex": profile.sex,
                    "height": profile.height,
                    "weight": profile.weight,
                    "activity_level": profile.activity_level,
                    "goals": list(profile.goals),
                    "health_conditions": list(profile.health_conditions),
                    "dietary_restrictions": list(profile.dietary_restrictions),
                    "daily_calories": profile.daily_calories,
                    "target_protein": profile.target_protein,
                    "target_carbs": profile.target_carbs,
                    "target_fat": profile.target_fat,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save user profile")
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        user_id=str(row["user_id"]),
        name=str(row.get("name") or ""),
        age=row.get("age"),
        sex=row.get("sex"),
        height=_optional_float(row.get("height")),
        weight=_optional_float(row.get("weight")),
        activity_level=row.get("activity_level"),
        goals=list(row.get("goals") or []),
        health_conditions=list(row.get("health_conditions") or []),
        dietary_restrictions=list(row.get("dietary_restrictions") or []),
        daily_calories=_optional_float(row.get("daily_calories")),
        target_protein=_optional_float(row.get("target_protein")),
        target_carbs=_optional_float(row.get("target_carbs")),
        target_fat=_optional_float(row.get("target_fat")),
    )


def _parse_targets(row: dict[str, object]) -> NutritionTargets:
    updated_at_raw = row.get("updated_at")
    return NutritionTargets(
        user_id=str(row["user_id"]),
        daily_calories=float(row["daily_calories"]),
        target_protein=float(row["target_protein"]),
        target_carbs=float(row["target_carbs"]),
        target_fat=float(row["target_fat"]),
        updated_at=datetime.fromisoformat(updated_at_raw)
        if isinstance(updated_at_raw, str) and updated_at_raw
        else None,
    )


def _optional_float(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)

"""Meal type classification by time of day and by recorded label."""

from datetime import datetime, tzinfo

from nutrition_dashboard.domain.meals import MealType, StoredMeal

BREAKFAST_CUTOFF_HOUR = 11
LUNCH_CUTOFF_HOUR = 15
DINNER_CUTOFF_HOUR = 19

DEFAULT_MEAL_EMOJI = "🍽️"
_MEAL_EMOJIS = {
    MealType.BREAKFAST: "🍳",
    MealType.LUNCH: "🍔",
    MealType.DINNER: "🍽️",
    MealType.SNACK: "🥨",
}
_CANONICAL_TYPES = {meal_type.value.lower(): meal_type for meal_type in MealType}


def to_local_datetime(timestamp: datetime | str, tz: tzinfo | None = None) -> datetime:
    """Parse a timestamp and express it in the given timezone.

    Strings must be ISO-8601; a malformed string raises ``ValueError``.
    Naive values are treated as already local and are left untouched.
    """
    value = (
        datetime.fromisoformat(timestamp) if isinstance(timestamp, str) else timestamp
    )
    if tz is not None and value.tzinfo is not None:
        return value.astimezone(tz)
    return value


def classify_meal_type(
    timestamp: datetime | str, tz: tzinfo | None = None
) -> MealType:
    """Return the meal type for the local hour of a timestamp."""
    hour = to_local_datetime(timestamp, tz).hour
    if hour < BREAKFAST_CUTOFF_HOUR:
        return MealType.BREAKFAST
    if hour < LUNCH_CUTOFF_HOUR:
        return MealType.LUNCH
    if hour < DINNER_CUTOFF_HOUR:
        return MealType.DINNER
    return MealType.SNACK


def parse_meal_type(raw: str) -> MealType | str:
    """Map a recorded meal type label to a canonical type.

    Labels outside the canonical four are kept as a custom type with the
    first letter upper-cased.
    """
    cleaned = raw.strip()
    canonical = _CANONICAL_TYPES.get(cleaned.lower())
    if canonical is not None:
        return canonical
    return cleaned[:1].upper() + cleaned[1:]


def resolve_meal_type(meal: StoredMeal, tz: tzinfo | None = None) -> str:
    """Return the recorded meal type if present, else classify by time."""
    recorded = meal.full_nutrition_data.meal_type if meal.full_nutrition_data else None
    if isinstance(recorded, str) and recorded.strip():
        return str(parse_meal_type(recorded))
    return str(classify_meal_type(meal.timestamp, tz))


def meal_emoji(meal_type: str) -> str:
    """Return the emoji for a meal type."""
    return _MEAL_EMOJIS.get(meal_type, DEFAULT_MEAL_EMOJI)

"""User settings service."""

from dataclasses import dataclass
from typing import Protocol
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "UTC"


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_timezone(self, user_id: str) -> str | None:
        """Return the user's timezone if set."""

    def set_timezone(self, user_id: str, timezone_name: str) -> None:
        """Store the user's timezone."""


@dataclass
class UserSettingsService:
    """Service for user settings."""

    repository: UserSettingsRepository

    def get_timezone(self, user_id: str) -> str:
        """Return the user timezone or UTC if unset."""
        return self.repository.get_timezone(user_id) or DEFAULT_TIMEZONE

    def get_zone(self, user_id: str) -> ZoneInfo:
        """Return the user's timezone as a tzinfo."""
        return ZoneInfo(self.get_timezone(user_id))

    def set_timezone(self, user_id: str, timezone_name: str) -> None:
        """Persist a user's timezone after checking it names a real zone."""
        ZoneInfo(timezone_name)
        self.repository.set_timezone(user_id, timezone_name)

"""Tests for user settings service."""

from zoneinfo import ZoneInfoNotFoundError

import pytest

from nutrition_dashboard.services.user_settings import UserSettingsService
from tests.conftest import InMemoryUserSettingsRepository


def test_timezone_defaults_to_utc() -> None:
    service = UserSettingsService(InMemoryUserSettingsRepository())

    assert service.get_timezone("user-1") == "UTC"
    assert service.get_zone("user-1").key == "UTC"


def test_set_timezone() -> None:
    repository = InMemoryUserSettingsRepository()
    service = UserSettingsService(repository)

    service.set_timezone("user-1", "Europe/Rome")

    assert service.get_timezone("user-1") == "Europe/Rome"


def test_set_unknown_timezone_is_rejected() -> None:
    repository = InMemoryUserSettingsRepository()
    service = UserSettingsService(repository)

    with pytest.raises(ZoneInfoNotFoundError):
        service.set_timezone("user-1", "Mars/Olympus_Mons")

    assert repository.timezones == {}

"""Tests for container wiring."""

from nutrition_dashboard.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.dashboard_service.meal_service is container.meal_service
    assert container.dashboard_service.goals_service is container.goals_service
    assert container.goals_service.ttl_seconds == 300
    assert container.meal_service.retention_days == 30


def test_build_container_uses_separate_state_cache(settings) -> None:
    container = build_container(settings)

    dashboard = container.dashboard_service
    assert dashboard.state_ttl_seconds == 3600
    assert dashboard.state_cache is not container.goals_service.cache

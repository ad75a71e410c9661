import logging

import pytest
from pydantic import ValidationError

import placeintel
from placeintel.config import Settings


def test_defaults(monkeypatch):
    for name in ("CLUSTER_RADIUS_METERS", "MIN_VISITS_FOR_PLACE", "TIMEZONE", "LOG_LEVEL"):
        monkeypatch.delenv(f"PLACEINTEL_{name}", raising=False)

    config = Settings(_env_file=None)

    assert config.cluster_radius_meters == 50.0
    assert config.min_visits_for_place == 2
    assert config.timezone == "UTC"
    assert config.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PLACEINTEL_CLUSTER_RADIUS_METERS", "120")
    monkeypatch.setenv("PLACEINTEL_TIMEZONE", " Europe/Berlin ")
    monkeypatch.setenv("PLACEINTEL_LOG_LEVEL", "debug")

    config = Settings(_env_file=None)

    assert config.cluster_radius_meters == 120.0
    assert config.timezone == "Europe/Berlin"
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    "field, value",
    [
        ("timezone", "Nowhere/Special"),
        ("categorizer_timezone", "Nowhere/Special"),
        ("cluster_radius_meters", 0),
        ("min_visits_for_place", 0),
        ("log_level", "chatty"),
    ],
)
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: value})


def test_configure_logging_uses_settings_level(monkeypatch):
    captured = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
    monkeypatch.setattr(placeintel.settings, "log_level", "WARNING")

    placeintel.configure_logging()
    assert captured["level"] == "WARNING"

    placeintel.configure_logging("debug")
    assert captured["level"] == "DEBUG"

"""Tests for settings and logging configuration."""

import logging

from app.core.config import Settings
from app.core.logging import configure_logging, get_logger


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./other.db")
    monkeypatch.setenv("ENV", "production")
    settings = Settings(_env_file=None)
    assert settings.DATABASE_URL == "sqlite+aiosqlite:///./other.db"
    assert settings.is_production
    assert not settings.is_development


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.APP_NAME == "JourneyMap"
    assert settings.DATABASE_URL.startswith("sqlite+aiosqlite://")


def test_configure_logging_level():
    configure_logging(level="warning")
    assert logging.getLogger().getEffectiveLevel() <= logging.WARNING
    assert get_logger(__name__) is not None

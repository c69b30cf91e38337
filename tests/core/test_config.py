"""Tests for environment-driven settings."""

from pathlib import Path

from contour_engine.core.config import Settings


def test_defaults(monkeypatch):
    """Unset variables fall back to the documented defaults."""
    for name in ("CACHE_MAX_ENTRIES", "CACHE_ENABLED", "MAX_RECENT_COMMANDS"):
        monkeypatch.delenv(name, raising=False)
    cfg = Settings(_env_file=None)
    assert cfg.CACHE_ENABLED is True
    assert cfg.CACHE_MAX_ENTRIES == 50
    assert cfg.CACHE_DICTIONARY_TTL_SECONDS == 7 * 24 * 60 * 60
    assert cfg.CACHE_TRANSLATION_TTL_SECONDS == 24 * 60 * 60
    assert cfg.CACHE_CURRENCY_TTL_SECONDS == 60 * 60
    assert cfg.MAX_RECENT_COMMANDS == 5


def test_environment_overrides(monkeypatch, tmp_path):
    """Environment variables are parsed into typed fields."""
    monkeypatch.setenv("CACHE_ENABLED", "false")
    monkeypatch.setenv("CACHE_MAX_ENTRIES", "7")
    monkeypatch.setenv("CONTOUR_DATA_DIR", str(tmp_path))
    cfg = Settings(_env_file=None)
    assert cfg.CACHE_ENABLED is False
    assert cfg.CACHE_MAX_ENTRIES == 7
    assert cfg.CONTOUR_DATA_DIR == Path(tmp_path)

"""Environment settings and structlog configuration."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from charting.log_config import configure_logging
from charting.settings import ChartSettings, load_settings
from seriesengine.colors import DEFAULT_PALETTE

pytestmark = pytest.mark.unit

_ENV_VARS = (
    "CHARTS_DEFAULT_PALETTE",
    "CHARTS_FALLBACK_COLOR",
    "CHARTS_LABEL_DISTANCE",
    "CHARTS_LOG_LEVEL",
    "CHARTS_LOG_JSON",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


def test_defaults_without_environment(clean_env: pytest.MonkeyPatch) -> None:
    """Unset variables fall back to the built-in defaults."""

    assert load_settings() == ChartSettings()
    assert load_settings().default_palette == DEFAULT_PALETTE


def test_settings_read_from_environment(clean_env: pytest.MonkeyPatch) -> None:
    """Every setting can be overridden by an environment variable."""

    clean_env.setenv("CHARTS_DEFAULT_PALETTE", "#111, #222,,")
    clean_env.setenv("CHARTS_FALLBACK_COLOR", "#999")
    clean_env.setenv("CHARTS_LABEL_DISTANCE", " 30 ")
    clean_env.setenv("CHARTS_LOG_LEVEL", "debug")
    clean_env.setenv("CHARTS_LOG_JSON", "yes")

    settings = load_settings()

    assert settings.default_palette == ("#111", "#222")
    assert settings.fallback_color == "#999"
    assert settings.label_distance == 30
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True


def test_configure_logging_applies_structlog_config(reset_structlog: None) -> None:
    """configure_logging installs the level filter and renderer."""

    configure_logging(ChartSettings(log_level="WARNING", log_json=True))

    assert structlog.is_configured() is True
    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)


def test_configure_logging_tolerates_unknown_level(reset_structlog: None) -> None:
    """An unknown level name falls back to INFO instead of raising."""

    configure_logging(ChartSettings(log_level="CHATTY"))

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

"""Runtime settings for chart components.

Settings are read from environment variables so a host can restyle every
component without touching component inputs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from seriesengine.colors import DEFAULT_PALETTE


def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_int(name: str, *, default: int) -> int:
    """Parse an integer environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed integer value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw.strip())


def _env_csv(name: str, *, default: list[str]) -> list[str]:
    """Parse a comma-separated environment variable into a list of strings.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        A list of non-empty, trimmed values.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass(frozen=True, slots=True)
class ChartSettings:
    """Host-level chart settings.

    Args:
        default_palette: Palette used when a component receives no `palette` input.
        fallback_color: Color used when no palette or explicit color applies.
        label_distance: Data-label distance for pie slices.
        log_level: Minimum structlog level name.
        log_json: Render log events as JSON instead of console lines.
    """

    default_palette: tuple[str, ...] = DEFAULT_PALETTE
    fallback_color: str | None = None
    label_distance: int = 20
    log_level: str = "INFO"
    log_json: bool = False


def load_settings() -> ChartSettings:
    """Build ChartSettings from the current environment."""

    return ChartSettings(
        default_palette=tuple(_env_csv("CHARTS_DEFAULT_PALETTE", default=list(DEFAULT_PALETTE))),
        fallback_color=os.getenv("CHARTS_FALLBACK_COLOR") or None,
        label_distance=_env_int("CHARTS_LABEL_DISTANCE", default=20),
        log_level=(os.getenv("CHARTS_LOG_LEVEL") or "INFO").strip().upper(),
        log_json=_env_bool("CHARTS_LOG_JSON", default=False),
    )

"""Pytest fixtures and marker enforcement shared across the suite."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from charting.settings import ChartSettings


@pytest.fixture
def settings() -> ChartSettings:
    """Return default settings, independent of the test environment."""

    return ChartSettings()


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite must be runnable by intent:
    - `unit`: pure, fast tests with no IO.
    - `integration`: tests touching the state store, the CLI, or the filesystem.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )

"""Input-boundary helpers for parallel arrays.

Host state arrays are not guaranteed to share a length or to hold clean
values. These helpers read them leniently so transformation steps never see
an IndexError or a NaN: short arrays read as `None` past their end, and
non-numeric or non-finite entries read as `None`.

The `SeriesSource` variant is resolved once at the boundary so later steps do
not have to re-inspect whether data is flat or grouped.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from .dto import Group, Point


def value_at(values: Sequence[object] | None, index: int) -> object | None:
    """Return `values[index]`, or None when the array is missing or too short."""

    if values is None or index < 0 or index >= len(values):
        return None
    return values[index]


def number_at(values: Sequence[object] | None, index: int) -> float | None:
    """Return a finite float at `index`, or None for missing/invalid entries."""

    return to_number(value_at(values, index))


def text_at(values: Sequence[object] | None, index: int) -> str | None:
    """Return a string at `index`, or None for missing/blank entries."""

    return to_text(value_at(values, index))


def to_number(raw: object) -> float | None:
    """Coerce a raw state value into a finite float.

    Args:
        raw: Value read from host state.

    Returns:
        A float, or None for missing, boolean, non-numeric, non-finite or
        out-of-range input.
    """

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return None
    elif isinstance(raw, str):
        stripped = raw.strip().replace(",", "")
        if not stripped:
            return None
        try:
            value = float(stripped)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(value):
        return None
    return value


def to_text(raw: object) -> str | None:
    """Coerce a raw state value into a label string (None when unset)."""

    if raw is None:
        return None
    if isinstance(raw, float) and not math.isfinite(raw):
        return None
    text = str(raw)
    return text if text.strip() else None


@dataclass(frozen=True, slots=True)
class FlatSeries:
    """One or more ungrouped series supplied side by side.

    Args:
        series: Point sequences, one per series.
        names: Positional name overrides (shorter tuples leave names unset).
        colors: Positional series color overrides.
    """

    series: tuple[tuple[Point, ...], ...]
    names: tuple[str | None, ...] = ()
    colors: tuple[str | None, ...] = ()


@dataclass(frozen=True, slots=True)
class GroupedSeries:
    """Series produced by the grouping engine, one per group."""

    groups: tuple[Group, ...]


SeriesSource = Union[FlatSeries, GroupedSeries]

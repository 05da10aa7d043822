"""Assemble grouped or flat point data into renderer-ready series."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from .colors import resolve_color
from .dto import Point, SeriesSpec
from .inputs import FlatSeries, GroupedSeries, SeriesSource


def axis_for(index: int, axis_routing: Sequence[object] | None) -> int:
    """Return 1 when `axis_routing[index]` is truthy, otherwise 0."""

    if axis_routing is None or index >= len(axis_routing):
        return 0
    return 1 if bool(axis_routing[index]) else 0


def flag_labels(points: Sequence[Point], label_threshold: float | None) -> tuple[Point, ...]:
    """Flag points whose value is below the threshold for label suppression.

    Points are never removed. A point without a value keeps its label flag.

    Args:
        points: Points in original order.
        label_threshold: Threshold, or None to leave every label visible.

    Returns:
        Points with `show_label` set accordingly.
    """

    if label_threshold is None:
        return tuple(points)
    return tuple(
        replace(point, show_label=point.value is None or point.value >= label_threshold)
        for point in points
    )


def assemble_series(
    source: SeriesSource,
    *,
    axis_routing: Sequence[object] | None = None,
    label_threshold: float | None = None,
    palette: Sequence[str] = (),
    default_color: str | None = None,
) -> tuple[SeriesSpec, ...]:
    """Build one SeriesSpec per group or flat series.

    Args:
        source: Grouped or flat input, resolved at the input boundary.
        axis_routing: Truthy entries route the series at that index to the
            secondary axis; missing entries default to the primary axis.
        label_threshold: Display directive forwarded to every series.
        palette: Palette for flat series without an explicit color.
        default_color: Fallback color for flat series.

    Returns:
        Series in input order with points in original index order.
    """

    if isinstance(source, GroupedSeries):
        return tuple(
            SeriesSpec(
                name=group.name,
                color=group.color,
                axis_index=axis_for(idx, axis_routing),
                data=flag_labels(group.points, label_threshold),
                label_threshold=label_threshold,
            )
            for idx, group in enumerate(source.groups)
        )

    return _assemble_flat(
        source,
        axis_routing=axis_routing,
        label_threshold=label_threshold,
        palette=palette,
        default_color=default_color,
    )


def _assemble_flat(
    source: FlatSeries,
    *,
    axis_routing: Sequence[object] | None,
    label_threshold: float | None,
    palette: Sequence[str],
    default_color: str | None,
) -> tuple[SeriesSpec, ...]:
    series: list[SeriesSpec] = []
    for idx, points in enumerate(source.series):
        name = source.names[idx] if idx < len(source.names) else None
        series.append(
            SeriesSpec(
                name=name,
                color=resolve_color(idx, None, source.colors, default_color, palette=palette),
                axis_index=axis_for(idx, axis_routing),
                data=flag_labels(points, label_threshold),
                label_threshold=label_threshold,
            )
        )
    return tuple(series)

"""Partition parallel arrays into ordered groups.

Groups follow insertion order: a group's order is the position at which its
tag first appears, never the sort order of the tag. Points keep their original
index order within each group.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Final

from .colors import group_color, resolve_color
from .dto import Group, Point
from .inputs import number_at, text_at

UNGROUPED_LABEL: Final[str] = "Ungrouped"


def build_points(
    labels: Sequence[object],
    values: Sequence[object] | None = None,
    *,
    secondary_values: Sequence[object] | None = None,
    xs: Sequence[object] | None = None,
    ys: Sequence[object] | None = None,
    zs: Sequence[object] | None = None,
) -> tuple[Point, ...]:
    """Build one Point per label, padding short auxiliary arrays with None.

    Args:
        labels: Point labels; their length defines the number of points.
        values: Primary values.
        secondary_values: Optional secondary values.
        xs: Optional x coordinates.
        ys: Optional y coordinates.
        zs: Optional size coordinates.

    Returns:
        Points in original index order without group or color assigned.
    """

    return tuple(
        Point(
            index=idx,
            name=text_at(labels, idx),
            value=number_at(values, idx),
            secondary_value=number_at(secondary_values, idx),
            x=number_at(xs, idx),
            y=number_at(ys, idx),
            z=number_at(zs, idx),
        )
        for idx in range(len(labels))
    )


def grouping_active(group_tags: Sequence[object] | None) -> bool:
    """Return True when at least one group tag is set."""

    if not group_tags:
        return False
    return any(text_at(group_tags, idx) is not None for idx in range(len(group_tags)))


def group_points(
    labels: Sequence[object],
    values: Sequence[object] | None,
    group_tags: Sequence[object] | None,
    *,
    secondary_values: Sequence[object] | None = None,
    xs: Sequence[object] | None = None,
    ys: Sequence[object] | None = None,
    zs: Sequence[object] | None = None,
    colors: Sequence[str | None] = (),
    palette: Sequence[str] = (),
    default_color: str | None = None,
) -> tuple[Group, ...]:
    """Group points by tag in first-seen order.

    Args:
        labels: Point labels; their length defines the number of points.
        values: Primary values aligned to labels.
        group_tags: Group tag per point. Empty or all-unset disables grouping.
        secondary_values: Optional secondary values.
        xs: Optional x coordinates.
        ys: Optional y coordinates.
        zs: Optional size coordinates.
        colors: Per-index explicit colors.
        palette: Caller palette (empty means not supplied).
        default_color: Fallback color for ungrouped points.

    Returns:
        Groups in first-seen order. The degenerate case returns a single
        implicit group (name None) holding every point.
    """

    points = build_points(labels, values, secondary_values=secondary_values, xs=xs, ys=ys, zs=zs)

    if not grouping_active(group_tags):
        implicit_color = resolve_color(0, None, (), default_color, palette=palette)
        colored = tuple(
            replace(point, color=resolve_color(point.index, None, colors, default_color, palette=palette))
            for point in points
        )
        return (Group(name=None, order=0, color=implicit_color, points=colored),)

    members: dict[str, list[Point]] = {}
    for point in points:
        tag = text_at(group_tags, point.index) or UNGROUPED_LABEL
        members.setdefault(tag, []).append(point)

    groups: list[Group] = []
    for order, (name, group_members) in enumerate(members.items()):
        legend_color = group_color(order, palette)
        # Explicit point colors win over the group color, the legend keeps the group color.
        colored = tuple(
            replace(
                point,
                group=name,
                color=resolve_color(point.index, name, colors, default_color, palette=palette, group_order=order),
            )
            for point in group_members
        )
        groups.append(Group(name=name, order=order, color=legend_color, points=colored))
    return tuple(groups)

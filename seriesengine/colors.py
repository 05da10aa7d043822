"""Color assignment for points, groups and series.

Colors are chosen by an explicit ordered policy list. Each rule either returns
a color or None, and the first defined value wins:

1. per-index explicit color,
2. per-group palette color (default palette when none is supplied),
3. per-index palette color for ungrouped data,
4. fallback color (None defers to the rendering collaborator).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Final

DEFAULT_PALETTE: Final[tuple[str, ...]] = (
    "#3366CC",
    "#DC3912",
    "#FF9900",
    "#109618",
    "#990099",
    "#0099C6",
    "#DD4477",
    "#66AA00",
    "#B82E2E",
    "#316395",
)


@dataclass(frozen=True, slots=True)
class ColorRequest:
    """Everything a color rule may look at.

    Args:
        index: Original array index of the item.
        group: Group name when grouping is active, otherwise None.
        group_order: 0-based first-seen order of the group.
        explicit_colors: Per-index color overrides (may be shorter than the data).
        palette: Caller palette; empty means "not supplied".
        default_color: Final fallback.
    """

    index: int
    group: str | None
    group_order: int | None
    explicit_colors: Sequence[str | None]
    palette: Sequence[str]
    default_color: str | None


ColorRule = Callable[[ColorRequest], "str | None"]


def explicit_color(index: int, explicit_colors: Sequence[str | None]) -> str | None:
    """Return the explicit color at `index`, or None when unset or blank."""

    if 0 <= index < len(explicit_colors):
        color = explicit_colors[index]
        if isinstance(color, str) and color.strip():
            return color
    return None


def cycle(colors: Sequence[str], position: int) -> str | None:
    """Return `colors[position % len(colors)]`, or None for an empty sequence."""

    if not colors:
        return None
    return colors[position % len(colors)]


def group_color(order: int, palette: Sequence[str] = ()) -> str:
    """Return the legend color for the group at `order`.

    Args:
        order: 0-based first-seen order of the group.
        palette: Caller palette; the default palette is used when empty.

    Returns:
        The palette color for the group.
    """

    colors = palette or DEFAULT_PALETTE
    return colors[order % len(colors)]


def _rule_explicit(request: ColorRequest) -> str | None:
    return explicit_color(request.index, request.explicit_colors)


def _rule_group_palette(request: ColorRequest) -> str | None:
    if request.group is None and request.group_order is None:
        return None
    return group_color(request.group_order or 0, request.palette)


def _rule_index_palette(request: ColorRequest) -> str | None:
    return cycle(request.palette, request.index)


def _rule_fallback(request: ColorRequest) -> str | None:
    return request.default_color


COLOR_POLICY: Final[tuple[ColorRule, ...]] = (
    _rule_explicit,
    _rule_group_palette,
    _rule_index_palette,
    _rule_fallback,
)


def resolve_color(
    index: int,
    group: str | None,
    explicit_colors: Sequence[str | None],
    default_color: str | None,
    *,
    palette: Sequence[str] = (),
    group_order: int | None = None,
) -> str | None:
    """Resolve the color of a single item.

    Args:
        index: Original array index of the item.
        group: Group name when grouping is active, otherwise None.
        explicit_colors: Per-index explicit colors.
        default_color: Color returned when no other rule applies.
        palette: Caller palette. Empty means no palette was supplied.
        group_order: First-seen order of `group`; required for grouped items.

    Returns:
        The first color produced by `COLOR_POLICY`, or None.
    """

    request = ColorRequest(
        index=index,
        group=group,
        group_order=group_order,
        explicit_colors=explicit_colors,
        palette=tuple(palette),
        default_color=default_color,
    )
    for rule in COLOR_POLICY:
        color = rule(request)
        if color is not None:
            return color
    return None

"""DTO types produced by the series engine.

DTOs are plain, immutable data containers handed from one transformation step
to the next and finally to the renderer. They carry no behavior and no
rendering-library types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Palette:
    """Ordered colors used cyclically, plus a fallback color.

    Attributes:
        colors: Colors cycled by group order or series index.
        fallback: Color used when nothing else applies, or None to defer to the
            rendering collaborator's own default.
    """

    colors: tuple[str, ...] = ()
    fallback: str | None = None


@dataclass(frozen=True, slots=True)
class Point:
    """A single data point built from one row of the parallel input arrays.

    Attributes:
        index: Position in the original arrays; the point's stable identity.
        name: Label for the point.
        value: Primary numeric value, or None when missing.
        secondary_value: Optional secondary numeric value.
        x: Optional x coordinate.
        y: Optional y coordinate.
        z: Optional size coordinate (bubble charts).
        group: Group tag the point was assigned to, if any.
        color: Resolved point color, or None to use the series color.
        show_label: False when the point's text label should be suppressed.
    """

    index: int
    name: str | None
    value: float | None = None
    secondary_value: float | None = None
    x: float | None = None
    y: float | None = None
    z: float | None = None
    group: str | None = None
    color: str | None = None
    show_label: bool = True


@dataclass(frozen=True, slots=True)
class Group:
    """A named partition of points sharing a tag.

    Attributes:
        name: Tag value, or None for the implicit single group.
        order: 0-based index of the group's first appearance.
        color: Legend color for the group.
        points: Points in original index order.
    """

    name: str | None
    order: int
    color: str | None
    points: tuple[Point, ...] = ()


@dataclass(frozen=True, slots=True)
class HierarchyNode:
    """A parent/child node for treemap and sunburst layouts.

    Attributes:
        id: Node identifier.
        parent_id: Parent identifier, or None for top-level nodes.
        name: Display name.
        value: Node value, or None when missing.
        percent: Share of the sibling total, 0-100 with one decimal.
        color: Palette or explicit color; None lets the renderer pick per level.
    """

    id: str
    parent_id: str | None
    name: str | None
    value: float | None
    percent: float
    color: str | None = None


@dataclass(frozen=True, slots=True)
class SeriesSpec:
    """One renderable dataset.

    Attributes:
        name: Legend name, or None for an unnamed series.
        color: Series color, or None to defer to the renderer.
        axis_index: 0 for the primary axis, 1 for the secondary axis.
        data: Points in original index order.
        label_threshold: Threshold used to flag label suppression, forwarded
            as a display directive.
    """

    name: str | None
    color: str | None
    axis_index: int
    data: tuple[Point, ...]
    label_threshold: float | None = None


class MorphMode(str, Enum):
    """Coordinate interpretation currently shown by a morph chart."""

    primary = "primary"
    alternate = "alternate"

    def flipped(self) -> "MorphMode":
        """Return the opposite mode."""

        return MorphMode.alternate if self is MorphMode.primary else MorphMode.primary


@dataclass(frozen=True, slots=True)
class MorphPoint:
    """A point carrying both coordinate pairs.

    Attributes:
        x: Primary x coordinate.
        y: Primary y coordinate.
        x_alt: Alternate x coordinate, if any.
        y_alt: Alternate y coordinate, if any.
    """

    x: float | None
    y: float | None
    x_alt: float | None = None
    y_alt: float | None = None


@dataclass(frozen=True, slots=True)
class UpdateCommand:
    """Move one point to a new position."""

    series_index: int
    point_index: int
    new_x: float | None
    new_y: float | None


@dataclass(frozen=True, slots=True)
class MorphBatch:
    """All update commands of a single toggle.

    Attributes:
        token: Sequence number identifying the batch within its controller.
        target_mode: Mode that becomes current when the batch completes.
        commands: One command per point across every series.
        positions: Per-series positions after the batch is applied.
    """

    token: int
    target_mode: MorphMode
    commands: tuple[UpdateCommand, ...]
    positions: tuple[tuple[tuple[float | None, float | None], ...], ...]

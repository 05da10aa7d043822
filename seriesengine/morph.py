"""Coordinate morphing between two per-point coordinate interpretations.

Each point carries a primary `(x, y)` pair and an alternate `(x_alt, y_alt)`
pair. A toggle moves every point to the pair selected by the new mode as one
logical batch:

1. `begin_toggle()` plans the batch (one update command per point) without
   changing controller state,
2. the host applies every command to its renderer in any order,
3. `complete(batch)` commits the new mode and positions at once.

Only one batch may be in flight; a second toggle is rejected until the first
completes or is aborted. A point without a usable target pair stays where it
is.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .dto import MorphBatch, MorphMode, MorphPoint, UpdateCommand

Position = tuple[float | None, float | None]
Positions = tuple[tuple[Position, ...], ...]


def _usable(value: float | None) -> bool:
    return value is not None and not (isinstance(value, float) and math.isnan(value))


def coordinates_for(point: MorphPoint, mode: MorphMode) -> Position | None:
    """Return the coordinate pair for `mode`, or None when it is incomplete."""

    if mode is MorphMode.primary:
        x, y = point.x, point.y
    else:
        x, y = point.x_alt, point.y_alt
    if _usable(x) and _usable(y):
        return (x, y)
    return None


def initial_positions(series: Sequence[Sequence[MorphPoint]], mode: MorphMode) -> Positions:
    """Return starting positions for every point in `mode`.

    Points lacking the requested pair fall back to their primary pair.
    """

    return tuple(
        tuple(coordinates_for(point, mode) or (point.x, point.y) for point in points)
        for points in series
    )


def plan_toggle(
    series: Sequence[Sequence[MorphPoint]],
    current: Positions,
    target_mode: MorphMode,
) -> tuple[Positions, tuple[UpdateCommand, ...]]:
    """Plan the move of every point to `target_mode`.

    Args:
        series: Morph points per series.
        current: Current position of every point, aligned to `series`.
        target_mode: Mode to move to.

    Returns:
        The new positions and one update command per point.
    """

    positions: list[tuple[Position, ...]] = []
    commands: list[UpdateCommand] = []
    for series_index, points in enumerate(series):
        row: list[Position] = []
        for point_index, point in enumerate(points):
            here = current[series_index][point_index]
            new_x, new_y = coordinates_for(point, target_mode) or here
            row.append((new_x, new_y))
            commands.append(
                UpdateCommand(series_index=series_index, point_index=point_index, new_x=new_x, new_y=new_y)
            )
        positions.append(tuple(row))
    return tuple(positions), tuple(commands)


class CoordinateMorphController:
    """Hold morph state for one chart instance and batch its toggles."""

    def __init__(
        self,
        series: Sequence[Sequence[MorphPoint]],
        *,
        mode: MorphMode = MorphMode.primary,
    ) -> None:
        """Initialize the controller.

        Args:
            series: Morph points per series; point identity is its position.
            mode: Mode the chart is currently showing.
        """

        self._series: tuple[tuple[MorphPoint, ...], ...] = tuple(tuple(points) for points in series)
        self._mode = mode
        self._positions = initial_positions(self._series, mode)
        self._in_flight: MorphBatch | None = None
        self._next_token = 1

    @property
    def mode(self) -> MorphMode:
        return self._mode

    @property
    def positions(self) -> Positions:
        return self._positions

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None

    def position(self, series_index: int, point_index: int) -> Position:
        """Return the committed position of a single point."""

        return self._positions[series_index][point_index]

    def begin_toggle(self) -> MorphBatch | None:
        """Plan a toggle to the opposite mode.

        Returns:
            The planned batch, or None when another batch is still in flight.
        """

        if self._in_flight is not None:
            return None
        target = self._mode.flipped()
        positions, commands = plan_toggle(self._series, self._positions, target)
        batch = MorphBatch(token=self._next_token, target_mode=target, commands=commands, positions=positions)
        self._next_token += 1
        self._in_flight = batch
        return batch

    def complete(self, batch: MorphBatch) -> bool:
        """Commit a batch once every command has been applied.

        Returns:
            True when the batch was the one in flight and is now committed.
        """

        if self._in_flight is None or batch.token != self._in_flight.token:
            return False
        self._mode = batch.target_mode
        self._positions = batch.positions
        self._in_flight = None
        return True

    def abort(self, batch: MorphBatch) -> bool:
        """Drop an in-flight batch without changing mode or positions."""

        if self._in_flight is None or batch.token != self._in_flight.token:
            return False
        self._in_flight = None
        return True

    def toggle(self) -> MorphBatch | None:
        """Plan and immediately commit a toggle.

        Returns:
            The committed batch, or None when a batch was already in flight.
        """

        batch = self.begin_toggle()
        if batch is None:
            return None
        self.complete(batch)
        return batch

"""Apply morph batches to a rendering engine instance.

The morph controller only plans coordinates. This adapter is the thin layer
that pushes a batch into a live chart: every point update first, then a
single redraw, then the controller commit.
"""

from __future__ import annotations

from typing import Protocol

import structlog

from seriesengine.dto import MorphBatch
from seriesengine.morph import CoordinateMorphController

logger = structlog.get_logger(__name__)


class MorphTarget(Protocol):
    """Rendering-engine side of a morph chart."""

    def update_point(self, series_index: int, point_index: int, x: float | None, y: float | None) -> None:
        """Move a point without redrawing."""

    def redraw(self) -> None:
        """Redraw the chart once all pending point updates are in place."""


def apply_toggle(controller: CoordinateMorphController, target: MorphTarget) -> MorphBatch | None:
    """Toggle a morph chart as a single batch.

    Args:
        controller: Morph state of the chart.
        target: Rendering engine adapter receiving the updates.

    Returns:
        The committed batch, or None when a toggle was already in flight.

    Raises:
        Exception: Any error raised by `target`; the batch is aborted first so
            the controller keeps its pre-toggle mode and positions.
    """

    batch = controller.begin_toggle()
    if batch is None:
        logger.warning("morph_toggle_rejected", reason="toggle_in_flight", mode=controller.mode.value)
        return None

    try:
        for command in batch.commands:
            target.update_point(command.series_index, command.point_index, command.new_x, command.new_y)
        target.redraw()
    except Exception:
        controller.abort(batch)
        logger.exception("morph_toggle_aborted", token=batch.token, target_mode=batch.target_mode.value)
        raise

    controller.complete(batch)
    logger.info(
        "morph_toggle_committed",
        token=batch.token,
        mode=batch.target_mode.value,
        point_count=len(batch.commands),
    )
    return batch

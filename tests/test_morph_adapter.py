"""Applying morph batches to a rendering target."""

from __future__ import annotations

import pytest

from charting.morph_adapter import apply_toggle
from seriesengine.dto import MorphMode, MorphPoint
from seriesengine.morph import CoordinateMorphController

pytestmark = pytest.mark.unit


class RecordingTarget:
    def __init__(self, *, fail_on_point: int | None = None) -> None:
        self.calls: list[tuple] = []
        self._fail_on_point = fail_on_point

    def update_point(self, series_index: int, point_index: int, x: float | None, y: float | None) -> None:
        if point_index == self._fail_on_point:
            raise RuntimeError("renderer went away")
        self.calls.append(("update", series_index, point_index, x, y))

    def redraw(self) -> None:
        self.calls.append(("redraw",))


def _controller() -> CoordinateMorphController:
    return CoordinateMorphController([[MorphPoint(1, 2, 5, 6), MorphPoint(3, 4, 7, 8)]])


def test_apply_toggle_updates_every_point_then_redraws_once() -> None:
    """All updates land before a single redraw, then the batch commits."""

    controller = _controller()
    target = RecordingTarget()

    batch = apply_toggle(controller, target)

    assert batch is not None
    assert target.calls == [
        ("update", 0, 0, 5, 6),
        ("update", 0, 1, 7, 8),
        ("redraw",),
    ]
    assert controller.mode is MorphMode.alternate
    assert controller.in_flight is False


def test_apply_toggle_aborts_when_target_fails() -> None:
    """A failing renderer leaves the controller in its pre-toggle state."""

    controller = _controller()

    with pytest.raises(RuntimeError):
        apply_toggle(controller, RecordingTarget(fail_on_point=1))

    assert controller.mode is MorphMode.primary
    assert controller.in_flight is False
    assert controller.position(0, 0) == (1, 2)


def test_apply_toggle_rejects_while_batch_in_flight() -> None:
    """A second toggle does not touch the target."""

    controller = _controller()
    assert controller.begin_toggle() is not None
    target = RecordingTarget()

    assert apply_toggle(controller, target) is None
    assert target.calls == []

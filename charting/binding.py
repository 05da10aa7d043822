"""Keep a chart specification in sync with host-owned state.

The host owns state as named fields. A `ChartBinding` subscribes to a
`StateStore`, and on every change to one of its component's fields it reads a
fresh snapshot, calls `recompute` and hands the complete result to a sink.
Recomputes for one binding are serialized: a change that arrives while a
recompute is running is folded into one follow-up recompute, and a change
that arrives while a morph toggle is in flight is recomputed once the toggle
has committed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Protocol

import structlog

from seriesengine.dto import MorphBatch
from seriesengine.morph import CoordinateMorphController

from .morph_adapter import MorphTarget, apply_toggle
from .render import RenderedChart, build_morph_controller, recompute
from .schema import ChartComponent
from .settings import ChartSettings, load_settings

logger = structlog.get_logger(__name__)

ChangeCallback = Callable[[str], None]
Unsubscribe = Callable[[], None]


class StateStore(Protocol):
    """Key-value store with change notifications."""

    def get(self, name: str) -> object:
        """Return the current value of a field, or None when unset."""

    def subscribe(self, callback: ChangeCallback) -> Unsubscribe:
        """Call `callback(name)` after any field changes; return an unsubscribe function."""


class InMemoryStateStore:
    """Minimal StateStore used by tests, the CLI and simple hosts."""

    def __init__(self, initial: Mapping[str, object] | None = None) -> None:
        self._values: dict[str, object] = dict(initial or {})
        self._subscribers: list[ChangeCallback] = []

    def get(self, name: str) -> object:
        return self._values.get(name)

    def set(self, name: str, value: object) -> None:
        """Set a field and notify subscribers when the value changed."""

        if name in self._values and self._values[name] == value:
            return
        self._values[name] = value
        for callback in list(self._subscribers):
            callback(name)

    def update(self, values: Mapping[str, object]) -> None:
        """Set several fields, notifying once per changed field."""

        for name, value in values.items():
            self.set(name, value)

    def subscribe(self, callback: ChangeCallback) -> Unsubscribe:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe


def read_snapshot(store: StateStore, names: Iterable[str]) -> dict[str, object]:
    """Read the named fields from a store; unset fields are omitted."""

    snapshot: dict[str, object] = {}
    for name in names:
        value = store.get(name)
        if value is not None:
            snapshot[name] = value
    return snapshot


class ChartBinding:
    """Bind one chart component instance to a state store."""

    def __init__(
        self,
        component: ChartComponent,
        store: StateStore,
        sink: Callable[[RenderedChart], None],
        *,
        settings: ChartSettings | None = None,
    ) -> None:
        """Initialize the binding.

        Args:
            component: Component definition this instance renders.
            store: Host state store.
            sink: Receives every recomputed chart (the rendering collaborator).
            settings: Host settings passed to every `recompute`. Read from the
                environment once, here, when omitted.
        """

        self._component = component
        self._store = store
        self._sink = sink
        self._settings = settings or load_settings()
        self._fields = frozenset(component.field_names())
        self._unsubscribe: Unsubscribe | None = None
        self._rendered: RenderedChart | None = None
        self._morph: CoordinateMorphController | None = None
        self._running = False
        self._dirty = False
        self._deferred = False

    @property
    def rendered(self) -> RenderedChart | None:
        return self._rendered

    @property
    def morph(self) -> CoordinateMorphController | None:
        return self._morph

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> RenderedChart | None:
        """Subscribe to the store and render once."""

        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._on_change)
        self.refresh()
        return self._rendered

    def stop(self) -> None:
        """Stop listening for changes. The last rendered chart is kept."""

        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def refresh(self) -> None:
        """Recompute from a fresh snapshot, serializing overlapping requests."""

        if self._running:
            self._dirty = True
            return

        self._running = True
        try:
            while True:
                self._dirty = False
                self._recompute_once()
                if not self._dirty:
                    break
        finally:
            self._running = False

    def toggle_morph(self, target: MorphTarget) -> MorphBatch | None:
        """Toggle a morph chart's coordinates on `target` as one batch.

        Returns:
            The committed batch, or None when the chart has no morph state or a
            toggle is already in flight.
        """

        if self._morph is None:
            logger.warning("morph_toggle_ignored", component=self._component.id, reason="not_a_morph_chart")
            return None
        try:
            return apply_toggle(self._morph, target)
        finally:
            if self._deferred:
                self._deferred = False
                self.refresh()

    def _on_change(self, name: str) -> None:
        if name not in self._fields:
            return
        if self._morph is not None and self._morph.in_flight:
            # Recompute after the toggle commits so its mode is carried over.
            self._deferred = True
            logger.debug("chart_recompute_deferred", component=self._component.id, field=name)
            return
        logger.debug("chart_input_changed", component=self._component.id, field=name)
        self.refresh()

    def _recompute_once(self) -> None:
        snapshot = read_snapshot(self._store, self._component.field_names())
        mode = self._morph.mode if self._morph is not None else None
        rendered = recompute(self._component, snapshot, settings=self._settings, morph_mode=mode)
        self._rendered = rendered
        self._morph = build_morph_controller(rendered)
        self._sink(rendered)

"""Typed access to a host state snapshot.

A snapshot is whatever the host state store returns for a component's fields.
`ChartInputs` normalizes its shape once: array fields become tuples (anything
else reads as empty), scalar fields are coerced to `str | None`,
`float | None` or `bool`. Element-level coercion of arrays happens inside the
series engine, which pads and cleans entries as it reads them.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from seriesengine.inputs import to_number, to_text

from .schema import ChartComponent


def _as_tuple(raw: object) -> tuple[object, ...]:
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        return tuple(raw)
    return ()


def _as_bool(raw: object) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return bool(raw)


@dataclass(frozen=True, slots=True)
class ChartInputs:
    """Normalized snapshot of a component's fields.

    Args:
        component: Component the snapshot belongs to.
        values: Normalized values keyed by field name. Fields absent from the
            snapshot are absent here.
    """

    component: ChartComponent
    values: Mapping[str, object] = field(default_factory=dict)

    def array(self, name: str) -> tuple[object, ...]:
        """Return an array field, or () when unset."""

        raw = self.values.get(name)
        return raw if isinstance(raw, tuple) else ()

    def strings(self, name: str) -> tuple[str | None, ...]:
        """Return an array field with every entry coerced to text."""

        return tuple(to_text(item) for item in self.array(name))

    def booleans(self, name: str) -> tuple[bool, ...]:
        """Return an array field with every entry coerced to a boolean."""

        return tuple(_as_bool(item) for item in self.array(name))

    def text(self, name: str) -> str | None:
        raw = self.values.get(name)
        return raw if isinstance(raw, str) else None

    def number(self, name: str) -> float | None:
        raw = self.values.get(name)
        return raw if isinstance(raw, float) else None

    def flag(self, name: str) -> bool:
        return self.values.get(name) is True

    def palette(self) -> tuple[str, ...]:
        """Return the non-blank palette entries in order."""

        return tuple(color for color in self.strings("palette") if color is not None)


def read_inputs(component: ChartComponent, snapshot: Mapping[str, object]) -> ChartInputs:
    """Normalize a raw snapshot for `component`.

    Args:
        component: Component whose fields are read.
        snapshot: Raw values from host state (extra keys are ignored).

    Returns:
        ChartInputs with one entry per field present in the snapshot.
    """

    values: dict[str, object] = {}
    for input_field in component.fields:
        if input_field.name not in snapshot:
            continue
        raw = snapshot[input_field.name]
        if input_field.field_type.endswith("_array"):
            values[input_field.name] = _as_tuple(raw)
        elif input_field.field_type == "number":
            values[input_field.name] = to_number(raw)
        elif input_field.field_type == "boolean":
            values[input_field.name] = _as_bool(raw)
        else:
            values[input_field.name] = to_text(raw)
    return ChartInputs(component=component, values=values)

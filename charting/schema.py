"""Schema types for declarative chart components.

Every chart component is described by a `ChartComponent`: which renderer
branch it uses and which named state fields it subscribes to. The binding
layer reads exactly these fields on every recompute.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ChartKind = Literal[
    "pie",
    "bar",
    "line",
    "dual_axis",
    "bubble",
    "treemap",
    "sunburst",
    "morph_scatter",
]

FieldType = Literal[
    "string_array",
    "number_array",
    "boolean_array",
    "string",
    "number",
    "boolean",
]

SeriesType = Literal["column", "bar", "line", "spline", "area"]


@dataclass(frozen=True, slots=True)
class InputField:
    """A named state field read by a component.

    Args:
        name: State field name as used by the host (camelCase).
        field_type: Expected value shape.
        description: Short help text for the host's property panel.
    """

    name: str
    field_type: FieldType
    description: str = ""


@dataclass(frozen=True, slots=True)
class ComponentUI:
    """Presentation hints shared by every component."""

    reflow: bool = True
    background_color: str = "transparent"
    allow_point_select: bool = False


@dataclass(frozen=True, slots=True)
class ChartComponent:
    """Declarative chart component definition.

    Args:
        id: Stable, unique component identifier.
        title: Human-readable component name.
        kind: Renderer branch used for this component.
        fields: State fields the component subscribes to.
        series_type: Default renderer series type for cartesian kinds.
        description: Optional description shown in component lists.
        ui: Presentation hints.
    """

    id: str
    title: str
    kind: ChartKind
    fields: tuple[InputField, ...]
    series_type: SeriesType | None = None
    description: str | None = None
    ui: ComponentUI = ComponentUI()

    def field_names(self) -> tuple[str, ...]:
        """Return subscribed field names in declaration order."""

        return tuple(f.name for f in self.fields)

    def field(self, name: str) -> InputField | None:
        """Return the field definition for `name`, or None."""

        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None

"""Built-in chart component definitions."""

from __future__ import annotations

from typing import Final

from .schema import ChartComponent, ComponentUI, InputField
from .validator import validate_components

TITLE = InputField(name="title", field_type="string", description="Chart title.")
SUBTITLE = InputField(name="subtitle", field_type="string", description="Chart subtitle.")
WIDTH = InputField(name="width", field_type="number", description="Fixed width in pixels.")
HEIGHT = InputField(name="height", field_type="number", description="Fixed height in pixels.")
PALETTE = InputField(name="palette", field_type="string_array", description="Colors cycled by group or series.")
DEFAULT_COLOR = InputField(name="defaultColor", field_type="string", description="Color used when nothing else applies.")
LABEL_THRESHOLD = InputField(
    name="labelThreshold",
    field_type="number",
    description="Hide data labels for points below this value.",
)
LABELS = InputField(name="labels", field_type="string_array", description="Point labels.")
VALUES = InputField(name="values", field_type="number_array", description="Point values.")
COLORS = InputField(name="colors", field_type="string_array", description="Per-point color overrides.")
GROUPS = InputField(name="groups", field_type="string_array", description="Group tag per point.")
SERIES_NAMES = InputField(name="seriesNames", field_type="string_array", description="Series name overrides.")
SECONDARY_AXIS = InputField(
    name="secondaryAxis",
    field_type="boolean_array",
    description="Route the series at each index to the secondary axis.",
)
SERIES_TYPE = InputField(name="seriesType", field_type="string", description="Renderer series type override.")

_COMMON: Final[tuple[InputField, ...]] = (TITLE, SUBTITLE, WIDTH, HEIGHT, PALETTE, DEFAULT_COLOR)


COMPONENTS: Final[tuple[ChartComponent, ...]] = (
    ChartComponent(
        id="pie",
        title="Pie Chart",
        kind="pie",
        description="Share of total per label.",
        fields=(LABELS, VALUES, COLORS, GROUPS, LABEL_THRESHOLD, *_COMMON),
        ui=ComponentUI(allow_point_select=True),
    ),
    ChartComponent(
        id="bar",
        title="Bar Chart",
        kind="bar",
        series_type="column",
        description="One series per group, or one series with a color per bar.",
        fields=(
            LABELS,
            VALUES,
            COLORS,
            GROUPS,
            SERIES_NAMES,
            SECONDARY_AXIS,
            SERIES_TYPE,
            LABEL_THRESHOLD,
            *_COMMON,
        ),
    ),
    ChartComponent(
        id="line",
        title="Line Chart",
        kind="line",
        series_type="line",
        fields=(
            LABELS,
            VALUES,
            COLORS,
            GROUPS,
            SERIES_NAMES,
            SECONDARY_AXIS,
            SERIES_TYPE,
            LABEL_THRESHOLD,
            *_COMMON,
        ),
    ),
    ChartComponent(
        id="dual_axis",
        title="Dual Axis Chart",
        kind="dual_axis",
        series_type="column",
        description="Primary and secondary values plotted against two y axes.",
        fields=(
            LABELS,
            VALUES,
            InputField(name="secondaryValues", field_type="number_array", description="Secondary values."),
            InputField(name="seriesColors", field_type="string_array", description="Per-series colors."),
            SERIES_NAMES,
            SECONDARY_AXIS,
            SERIES_TYPE,
            LABEL_THRESHOLD,
            *_COMMON,
        ),
    ),
    ChartComponent(
        id="bubble",
        title="Bubble Chart",
        kind="bubble",
        fields=(
            LABELS,
            InputField(name="x", field_type="number_array", description="X coordinates."),
            InputField(name="y", field_type="number_array", description="Y coordinates."),
            InputField(name="z", field_type="number_array", description="Bubble sizes."),
            COLORS,
            GROUPS,
            LABEL_THRESHOLD,
            *_COMMON,
        ),
    ),
    ChartComponent(
        id="treemap",
        title="Treemap",
        kind="treemap",
        fields=(
            LABELS,
            VALUES,
            COLORS,
            InputField(name="ids", field_type="string_array", description="Node ids."),
            InputField(name="parents", field_type="string_array", description="Parent id per node."),
            LABEL_THRESHOLD,
            *_COMMON,
        ),
        ui=ComponentUI(allow_point_select=True),
    ),
    ChartComponent(
        id="sunburst",
        title="Sunburst",
        kind="sunburst",
        fields=(
            LABELS,
            VALUES,
            COLORS,
            InputField(name="ids", field_type="string_array", description="Node ids."),
            InputField(name="parents", field_type="string_array", description="Parent id per node."),
            LABEL_THRESHOLD,
            *_COMMON,
        ),
        ui=ComponentUI(allow_point_select=True),
    ),
    ChartComponent(
        id="morph_scatter",
        title="Morphing Scatter",
        kind="morph_scatter",
        description="Scatter plot that toggles between two coordinate sets.",
        fields=(
            LABELS,
            InputField(name="x", field_type="number_array", description="Primary x coordinates."),
            InputField(name="y", field_type="number_array", description="Primary y coordinates."),
            InputField(name="xAlt", field_type="number_array", description="Alternate x coordinates."),
            InputField(name="yAlt", field_type="number_array", description="Alternate y coordinates."),
            COLORS,
            GROUPS,
            InputField(name="alternateMode", field_type="boolean", description="Start in alternate coordinates."),
            *_COMMON,
        ),
    ),
)


_VALIDATION = validate_components(COMPONENTS)
if not _VALIDATION.is_valid:
    joined = "\n".join(_VALIDATION.errors)
    raise ValueError(f"Invalid COMPONENTS:\n{joined}")


COMPONENT_BY_ID: Final[dict[str, ChartComponent]] = {component.id: component for component in COMPONENTS}


def get_component(component_id: str) -> ChartComponent:
    """Return a built-in component by id.

    Raises:
        KeyError: When no component is registered under `component_id`.
    """

    try:
        return COMPONENT_BY_ID[component_id]
    except KeyError:
        raise KeyError(f"Unknown chart component: {component_id!r}") from None


def list_components() -> tuple[ChartComponent, ...]:
    """Return components sorted by title."""

    return tuple(sorted(COMPONENTS, key=lambda c: (c.title.lower(), c.id)))

"""Build rendering-engine option dictionaries from component snapshots.

`recompute` is the single entry point used by the binding layer: it reads a
snapshot, runs the series engine and returns a complete option dictionary.
It never merges with a previous result and never raises for bad snapshot
data; degraded input surfaces as `RenderedChart.warnings`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any, Final, TypedDict

import structlog

from seriesengine.assembler import assemble_series, flag_labels
from seriesengine.dto import Group, HierarchyNode, MorphMode, MorphPoint, Palette, Point, SeriesSpec
from seriesengine.grouping import build_points, group_points
from seriesengine.hierarchy import build_flat_hierarchy
from seriesengine.inputs import FlatSeries, GroupedSeries, SeriesSource, number_at
from seriesengine.morph import CoordinateMorphController, initial_positions

from .configs import get_component
from .inputs import ChartInputs, read_inputs
from .schema import ChartComponent, SeriesType
from .settings import ChartSettings, load_settings
from .validator import validate_snapshot

logger = structlog.get_logger(__name__)

PIE_POINT_FORMAT: Final[str] = (
    '<span style="color:{point.color}">●</span> {point.name}: <b>{point.percentage:.1f}%</b>'
)
SERIES_POINT_FORMAT: Final[str] = '<span style="color:{point.color}">●</span> {series.name}: <b>{point.y}</b><br/>'
BUBBLE_POINT_FORMAT: Final[str] = "{point.name}: ({point.x}, {point.y}), size {point.z}"
SCATTER_POINT_FORMAT: Final[str] = "{point.name}: ({point.x}, {point.y})"
HIERARCHY_POINT_FORMAT: Final[str] = "{point.name}: <b>{point.value}</b> ({point.custom.percent}%)"
SUNBURST_ROOT_ID: Final[str] = "__root__"
SERIES_TYPES: Final[frozenset[str]] = frozenset({"column", "bar", "line", "spline", "area"})


class ChartOptions(TypedDict, total=False):
    """Option dictionary handed to the rendering engine."""

    chart: dict[str, Any]
    title: dict[str, Any]
    subtitle: dict[str, Any]
    colors: list[str]
    tooltip: dict[str, Any]
    legend: dict[str, Any]
    xAxis: list[dict[str, Any]]
    yAxis: list[dict[str, Any]]
    series: list[dict[str, Any]]


@dataclass(frozen=True, slots=True)
class RenderedChart:
    """A recomputed chart specification.

    Args:
        component: Component the options were built for.
        options: Complete option dictionary for the rendering engine.
        warnings: Non-fatal input problems found while recomputing.
        morph_points: Morph coordinates per series (morph charts only).
        morph_mode: Coordinate mode the options were rendered in (morph charts only).
    """

    component: ChartComponent
    options: ChartOptions
    warnings: tuple[str, ...] = ()
    morph_points: tuple[tuple[MorphPoint, ...], ...] = ()
    morph_mode: MorphMode | None = None


def recompute(
    component: ChartComponent | str,
    snapshot: Mapping[str, object],
    *,
    settings: ChartSettings | None = None,
    morph_mode: MorphMode | None = None,
) -> RenderedChart:
    """Recompute a chart specification from a state snapshot.

    Args:
        component: Component definition or built-in component id.
        snapshot: Raw field values read from host state.
        settings: Host settings; defaults to `load_settings()`.
        morph_mode: Mode override for morph charts, used to keep the chart's
            current mode across recomputes.

    Returns:
        RenderedChart containing the option dictionary.

    Raises:
        KeyError: When `component` is an unknown component id.
    """

    if isinstance(component, str):
        component = get_component(component)
    settings = settings or load_settings()
    inputs = read_inputs(component, snapshot)
    validation = validate_snapshot(component, snapshot)

    if component.kind == "morph_scatter":
        options, morph_points, mode = _render_morph_scatter(inputs, settings=settings, morph_mode=morph_mode)
        rendered = RenderedChart(
            component=component,
            options=options,
            warnings=validation.warnings,
            morph_points=morph_points,
            morph_mode=mode,
        )
    else:
        renderer = _RENDERERS[component.kind]
        rendered = RenderedChart(
            component=component,
            options=renderer(inputs, settings=settings),
            warnings=validation.warnings,
        )

    if rendered.warnings:
        logger.warning("chart_input_degraded", component=component.id, warnings=list(rendered.warnings))
    logger.debug("chart_recomputed", component=component.id, series_count=len(rendered.options.get("series", [])))
    return rendered


def build_morph_controller(rendered: RenderedChart) -> CoordinateMorphController | None:
    """Return a morph controller matching a rendered morph chart, or None."""

    if rendered.morph_mode is None:
        return None
    return CoordinateMorphController(rendered.morph_points, mode=rendered.morph_mode)


def _palette(inputs: ChartInputs, settings: ChartSettings) -> Palette:
    """Return the caller palette and the fallback color for one recompute."""

    return Palette(colors=inputs.palette(), fallback=inputs.text("defaultColor") or settings.fallback_color)


def _base_options(inputs: ChartInputs, settings: ChartSettings, *, chart_type: str) -> ChartOptions:
    """Return options shared by every component."""

    ui = inputs.component.ui
    chart: dict[str, Any] = {
        "type": chart_type,
        "reflow": ui.reflow,
        "backgroundColor": ui.background_color,
    }
    width = inputs.number("width")
    if width is not None:
        chart["width"] = width
    height = inputs.number("height")
    if height is not None:
        chart["height"] = height

    return {
        "chart": chart,
        "title": {"text": inputs.text("title")},
        "subtitle": {"text": inputs.text("subtitle")},
        "colors": list(inputs.palette() or settings.default_palette),
    }


def _series_source(groups: Sequence[Group], *, names: Sequence[str | None] = ()) -> SeriesSource:
    """Resolve grouping output into the flat/grouped variant once."""

    if len(groups) == 1 and groups[0].name is None:
        return FlatSeries(series=(groups[0].points,), names=tuple(names))
    return GroupedSeries(groups=tuple(groups))


def _point_record(point: Point, *, series_color: str | None) -> dict[str, Any]:
    """Return fields common to every point record."""

    custom: dict[str, Any] = {"sourceIndex": point.index}
    if point.group is not None:
        custom["group"] = point.group
    record: dict[str, Any] = {"name": point.name, "custom": custom}
    if point.color is not None and point.color != series_color:
        record["color"] = point.color
    if not point.show_label:
        record["dataLabels"] = {"enabled": False}
    return record


def _series_record(spec: SeriesSpec, *, series_type: str, data: list[dict[str, Any]]) -> dict[str, Any]:
    record: dict[str, Any] = {"type": series_type, "yAxis": spec.axis_index, "data": data}
    if spec.name is not None:
        record["name"] = spec.name
    if spec.color is not None:
        record["color"] = spec.color
    if spec.label_threshold is not None:
        record["dataLabels"] = {"enabled": True}
        record["custom"] = {"labelThreshold": spec.label_threshold}
    return record


def _y_axes(
    specs: Sequence[SeriesSpec],
    *,
    titles: Sequence[str | None] = (),
    force_secondary: bool = False,
) -> list[dict[str, Any]]:
    """Return the primary y axis plus a secondary one when any series uses it."""

    def title(idx: int) -> str | None:
        return titles[idx] if idx < len(titles) else None

    axes: list[dict[str, Any]] = [{"title": {"text": title(0)}}]
    if force_secondary or any(spec.axis_index == 1 for spec in specs):
        axes.append({"title": {"text": title(1)}, "opposite": True})
    return axes


def _series_type(inputs: ChartInputs) -> SeriesType:
    requested = (inputs.text("seriesType") or "").strip().lower()
    if requested in SERIES_TYPES:
        return requested  # type: ignore[return-value]
    return inputs.component.series_type or "column"


def _render_pie(inputs: ChartInputs, *, settings: ChartSettings) -> ChartOptions:
    """Render a pie chart: one slice per label, colored per point or per group."""

    palette = _palette(inputs, settings)
    groups = group_points(
        inputs.array("labels"),
        inputs.array("values"),
        inputs.array("groups"),
        colors=inputs.strings("colors"),
        palette=palette.colors,
        default_color=palette.fallback,
    )
    points = tuple(sorted((point for group in groups for point in group.points), key=lambda p: p.index))
    points = flag_labels(points, inputs.number("labelThreshold"))

    ui = inputs.component.ui
    options = _base_options(inputs, settings, chart_type="pie")
    options["tooltip"] = {"headerFormat": "", "pointFormat": PIE_POINT_FORMAT}
    options["series"] = [
        {
            "type": "pie",
            "allowPointSelect": ui.allow_point_select,
            "cursor": "pointer",
            "data": [{**_point_record(point, series_color=None), "y": point.value} for point in points],
            "dataLabels": [{"enabled": True, "distance": settings.label_distance}],
        }
    ]
    return options


def _render_cartesian(inputs: ChartInputs, *, settings: ChartSettings) -> ChartOptions:
    """Render bar/line charts with one series per group."""

    palette = _palette(inputs, settings)
    groups = group_points(
        inputs.array("labels"),
        inputs.array("values"),
        inputs.array("groups"),
        colors=inputs.strings("colors"),
        palette=palette.colors,
        default_color=palette.fallback,
    )
    specs = assemble_series(
        _series_source(groups, names=inputs.strings("seriesNames")),
        axis_routing=inputs.booleans("secondaryAxis"),
        label_threshold=inputs.number("labelThreshold"),
        palette=palette.colors,
        default_color=palette.fallback,
    )

    series_type = _series_type(inputs)
    options = _base_options(inputs, settings, chart_type=series_type)
    options["xAxis"] = [{"type": "category"}]
    options["yAxis"] = _y_axes(specs)
    options["tooltip"] = {"pointFormat": SERIES_POINT_FORMAT}
    options["legend"] = {"enabled": len(specs) > 1}
    options["series"] = [
        _series_record(
            spec,
            series_type=series_type,
            data=[{**_point_record(point, series_color=spec.color), "y": point.value} for point in spec.data],
        )
        for spec in specs
    ]
    return options


def _render_dual_axis(inputs: ChartInputs, *, settings: ChartSettings) -> ChartOptions:
    """Render primary and secondary values as two series on two y axes."""

    points = build_points(
        inputs.array("labels"),
        inputs.array("values"),
        secondary_values=inputs.array("secondaryValues"),
    )
    secondary = tuple(replace(point, value=point.secondary_value) for point in points)
    names = inputs.strings("seriesNames")
    routing = inputs.booleans("secondaryAxis") or (False, True)
    palette = _palette(inputs, settings)
    specs = assemble_series(
        FlatSeries(series=(points, secondary), names=names, colors=inputs.strings("seriesColors")),
        axis_routing=routing,
        label_threshold=inputs.number("labelThreshold"),
        palette=palette.colors,
        default_color=palette.fallback,
    )

    series_type = _series_type(inputs)
    options = _base_options(inputs, settings, chart_type=series_type)
    options["xAxis"] = [{"categories": [point.name for point in points]}]
    options["yAxis"] = _y_axes(specs, titles=names, force_secondary=True)
    options["tooltip"] = {"shared": True, "pointFormat": SERIES_POINT_FORMAT}
    options["legend"] = {"enabled": True}
    options["series"] = [
        _series_record(
            spec,
            series_type=series_type if idx == 0 else "spline",
            data=[{**_point_record(point, series_color=spec.color), "y": point.value} for point in spec.data],
        )
        for idx, spec in enumerate(specs)
    ]
    return options


def _render_bubble(inputs: ChartInputs, *, settings: ChartSettings) -> ChartOptions:
    """Render bubbles, one series per group."""

    palette = _palette(inputs, settings)
    # Bubble sizes double as point values so label thresholds compare sizes.
    groups = group_points(
        inputs.array("labels"),
        inputs.array("z"),
        inputs.array("groups"),
        xs=inputs.array("x"),
        ys=inputs.array("y"),
        zs=inputs.array("z"),
        colors=inputs.strings("colors"),
        palette=palette.colors,
        default_color=palette.fallback,
    )
    specs = assemble_series(
        _series_source(groups),
        label_threshold=inputs.number("labelThreshold"),
        palette=palette.colors,
        default_color=palette.fallback,
    )

    options = _base_options(inputs, settings, chart_type="bubble")
    options["xAxis"] = [{"title": {"text": None}}]
    options["yAxis"] = _y_axes(specs)
    options["tooltip"] = {"headerFormat": "", "pointFormat": BUBBLE_POINT_FORMAT}
    options["legend"] = {"enabled": len(specs) > 1}
    options["series"] = [
        _series_record(
            spec,
            series_type="bubble",
            data=[
                {**_point_record(point, series_color=spec.color), "x": point.x, "y": point.y, "z": point.z}
                for point in spec.data
            ],
        )
        for spec in specs
    ]
    return options


def _hierarchy_nodes(inputs: ChartInputs) -> tuple[HierarchyNode, ...]:
    return build_flat_hierarchy(
        inputs.array("labels"),
        inputs.array("values"),
        inputs.strings("colors"),
        palette=inputs.palette(),
        ids=inputs.array("ids") or None,
        parents=inputs.array("parents") or None,
    )


def _node_record(node: HierarchyNode, *, parent: str | None, label_threshold: float | None) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": node.id,
        "name": node.name,
        "value": node.value,
        "custom": {"percent": node.percent},
    }
    if parent is not None:
        record["parent"] = parent
    if node.color is not None:
        record["color"] = node.color
    if label_threshold is not None and node.value is not None and node.value < label_threshold:
        record["dataLabels"] = {"enabled": False}
    return record


def _render_treemap(inputs: ChartInputs, *, settings: ChartSettings) -> ChartOptions:
    """Render a treemap from flat or pre-linked hierarchy arrays."""

    nodes = _hierarchy_nodes(inputs)
    known = {node.id for node in nodes}
    threshold = inputs.number("labelThreshold")

    options = _base_options(inputs, settings, chart_type="treemap")
    options["tooltip"] = {"headerFormat": "", "pointFormat": HIERARCHY_POINT_FORMAT}
    options["series"] = [
        {
            "type": "treemap",
            "layoutAlgorithm": "squarified",
            "allowTraversingTree": True,
            "allowPointSelect": inputs.component.ui.allow_point_select,
            "levels": [{"level": 1, "dataLabels": {"enabled": True}, "borderWidth": 3}],
            "data": [
                _node_record(
                    node,
                    parent=node.parent_id if node.parent_id in known else None,
                    label_threshold=threshold,
                )
                for node in nodes
            ],
        }
    ]
    return options


def _render_sunburst(inputs: ChartInputs, *, settings: ChartSettings) -> ChartOptions:
    """Render a sunburst; top-level nodes hang off an implicit root node."""

    nodes = _hierarchy_nodes(inputs)
    known = {node.id for node in nodes}
    threshold = inputs.number("labelThreshold")

    root = {"id": SUNBURST_ROOT_ID, "parent": "", "name": inputs.text("title") or ""}
    data = [root] + [
        _node_record(
            node,
            parent=node.parent_id if node.parent_id in known else SUNBURST_ROOT_ID,
            label_threshold=threshold,
        )
        for node in nodes
    ]

    options = _base_options(inputs, settings, chart_type="sunburst")
    options["tooltip"] = {"headerFormat": "", "pointFormat": HIERARCHY_POINT_FORMAT}
    options["series"] = [
        {
            "type": "sunburst",
            "allowTraversingTree": True,
            "allowPointSelect": inputs.component.ui.allow_point_select,
            "cursor": "pointer",
            "levels": [
                {"level": 1, "levelIsConstant": False},
                {"level": 2, "colorByPoint": True},
                {"level": 3, "colorVariation": {"key": "brightness", "to": -0.5}},
            ],
            "data": data,
        }
    ]
    return options


def _render_morph_scatter(
    inputs: ChartInputs,
    *,
    settings: ChartSettings,
    morph_mode: MorphMode | None,
) -> tuple[ChartOptions, tuple[tuple[MorphPoint, ...], ...], MorphMode]:
    """Render a scatter chart in its current coordinate mode."""

    palette = _palette(inputs, settings)
    groups = group_points(
        inputs.array("labels"),
        None,
        inputs.array("groups"),
        xs=inputs.array("x"),
        ys=inputs.array("y"),
        colors=inputs.strings("colors"),
        palette=palette.colors,
        default_color=palette.fallback,
    )
    specs = assemble_series(_series_source(groups), palette=palette.colors, default_color=palette.fallback)

    x_alt = inputs.array("xAlt")
    y_alt = inputs.array("yAlt")
    morph_points = tuple(
        tuple(
            MorphPoint(x=point.x, y=point.y, x_alt=number_at(x_alt, point.index), y_alt=number_at(y_alt, point.index))
            for point in spec.data
        )
        for spec in specs
    )
    if morph_mode is None:
        morph_mode = MorphMode.alternate if inputs.flag("alternateMode") else MorphMode.primary
    positions = initial_positions(morph_points, morph_mode)

    options = _base_options(inputs, settings, chart_type="scatter")
    options["xAxis"] = [{"title": {"text": None}}]
    options["yAxis"] = _y_axes(specs)
    options["tooltip"] = {"headerFormat": "", "pointFormat": SCATTER_POINT_FORMAT}
    options["legend"] = {"enabled": len(specs) > 1}
    options["series"] = [
        _series_record(
            spec,
            series_type="scatter",
            data=[
                {
                    **_point_record(point, series_color=spec.color),
                    "x": positions[series_index][point_index][0],
                    "y": positions[series_index][point_index][1],
                }
                for point_index, point in enumerate(spec.data)
            ],
        )
        for series_index, spec in enumerate(specs)
    ]
    return options, morph_points, morph_mode


_RENDERERS: Final[dict[str, Callable[..., ChartOptions]]] = {
    "pie": _render_pie,
    "bar": _render_cartesian,
    "line": _render_cartesian,
    "dual_axis": _render_dual_axis,
    "bubble": _render_bubble,
    "treemap": _render_treemap,
    "sunburst": _render_sunburst,
}

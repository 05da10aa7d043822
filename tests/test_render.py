"""Option dictionaries produced by `recompute` for every component kind."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from charting.render import SUNBURST_ROOT_ID, build_morph_controller, recompute
from charting.settings import ChartSettings
from seriesengine.colors import DEFAULT_PALETTE
from seriesengine.dto import MorphMode

pytestmark = pytest.mark.unit


def _data(options: dict, series_index: int = 0) -> list[dict]:
    return options["series"][series_index]["data"]


def test_pie_keeps_the_interactive_defaults(settings: ChartSettings) -> None:
    """Pie charts reflow on a transparent background with percentage tooltips."""

    rendered = recompute(
        "pie",
        {"labels": ["A", "B"], "values": [10, 30], "title": "Share", "subtitle": "Q1", "width": 400, "height": 300},
        settings=settings,
    )
    options = rendered.options

    assert options["chart"] == {
        "type": "pie",
        "reflow": True,
        "backgroundColor": "transparent",
        "width": 400.0,
        "height": 300.0,
    }
    assert options["title"] == {"text": "Share"}
    assert options["subtitle"] == {"text": "Q1"}
    assert options["tooltip"]["headerFormat"] == ""
    assert "{point.percentage:.1f}%" in options["tooltip"]["pointFormat"]
    assert options["colors"] == list(DEFAULT_PALETTE)

    series = options["series"][0]
    assert series["allowPointSelect"] is True
    assert series["cursor"] == "pointer"
    assert series["dataLabels"] == [{"enabled": True, "distance": 20}]
    assert [(point["name"], point["y"]) for point in series["data"]] == [("A", 10.0), ("B", 30.0)]
    assert all("color" not in point for point in series["data"])
    assert rendered.warnings == ()


def test_pie_label_distance_comes_from_settings() -> None:
    """Hosts can move pie data labels without touching inputs."""

    rendered = recompute("pie", {"labels": ["A"], "values": [1]}, settings=ChartSettings(label_distance=35))

    assert rendered.options["series"][0]["dataLabels"][0]["distance"] == 35


def test_pie_hides_labels_below_threshold(settings: ChartSettings) -> None:
    """Small slices keep their data but lose their label."""

    options = recompute(
        "pie",
        {"labels": ["A", "B"], "values": [10, 30], "labelThreshold": 15},
        settings=settings,
    ).options

    assert _data(options)[0]["dataLabels"] == {"enabled": False}
    assert "dataLabels" not in _data(options)[1]


def test_pie_grouped_slices_use_group_colors(settings: ChartSettings) -> None:
    """Grouped pie slices are colored by group and keep their original order."""

    options = recompute(
        "pie",
        {"labels": ["A", "B", "C"], "values": [1, 2, 3], "groups": ["x", "y", "x"], "palette": ["#111", "#222"]},
        settings=settings,
    ).options

    assert options["colors"] == ["#111", "#222"]
    assert [(point["name"], point["color"]) for point in _data(options)] == [
        ("A", "#111"),
        ("B", "#222"),
        ("C", "#111"),
    ]
    assert [point["custom"]["group"] for point in _data(options)] == ["x", "y", "x"]


def test_bar_builds_one_series_per_group(settings: ChartSettings) -> None:
    """Grouped bar charts emit a named, colored series per group."""

    options = recompute(
        "bar",
        {
            "labels": ["A", "B", "C"],
            "values": [10, 20, 30],
            "groups": ["x", "x", "y"],
            "palette": ["#111", "#222"],
        },
        settings=settings,
    ).options

    assert [(series["name"], series["color"], series["type"]) for series in options["series"]] == [
        ("x", "#111", "column"),
        ("y", "#222", "column"),
    ]
    assert [point["name"] for point in _data(options, 0)] == ["A", "B"]
    assert [point["y"] for point in _data(options, 1)] == [30.0]
    assert options["legend"] == {"enabled": True}
    assert options["xAxis"] == [{"type": "category"}]


def test_bar_without_groups_colors_each_bar_from_palette(settings: ChartSettings) -> None:
    """A single series gets per-bar palette colors."""

    options = recompute(
        "bar",
        {"labels": ["A", "B"], "values": [1, 2], "palette": ["#111", "#222"], "seriesNames": ["Total"]},
        settings=settings,
    ).options

    series = options["series"][0]
    assert series["name"] == "Total"
    assert series["color"] == "#111"
    assert "color" not in series["data"][0]
    assert series["data"][1]["color"] == "#222"
    assert options["legend"] == {"enabled": False}


def test_series_type_override_and_fallback(settings: ChartSettings) -> None:
    """Unknown series types fall back to the component default."""

    area = recompute("bar", {"labels": ["A"], "values": [1], "seriesType": "Area"}, settings=settings)
    bogus = recompute("line", {"labels": ["A"], "values": [1], "seriesType": "pie"}, settings=settings)

    assert area.options["chart"]["type"] == "area"
    assert area.options["series"][0]["type"] == "area"
    assert bogus.options["series"][0]["type"] == "line"


def test_dual_axis_routes_secondary_values_to_second_axis(settings: ChartSettings) -> None:
    """Secondary values render as a spline on an opposite y axis."""

    options = recompute(
        "dual_axis",
        {
            "labels": ["Jan", "Feb"],
            "values": [1, 2],
            "secondaryValues": [3, 4],
            "seriesNames": ["Revenue", "Margin"],
            "seriesColors": ["#abc", "#def"],
        },
        settings=settings,
    ).options

    assert options["xAxis"] == [{"categories": ["Jan", "Feb"]}]
    assert len(options["yAxis"]) == 2
    assert options["yAxis"][1]["opposite"] is True
    assert [(s["name"], s["color"], s["yAxis"], s["type"]) for s in options["series"]] == [
        ("Revenue", "#abc", 0, "column"),
        ("Margin", "#def", 1, "spline"),
    ]
    assert [point["y"] for point in _data(options, 1)] == [3.0, 4.0]


def test_bubble_emits_coordinates_and_sizes(settings: ChartSettings) -> None:
    """Bubble points carry x, y and z."""

    options = recompute(
        "bubble",
        {"labels": ["A", "B"], "x": [1, 2], "y": [3, 4], "z": [5, 6]},
        settings=settings,
    ).options

    assert options["chart"]["type"] == "bubble"
    assert [(p["x"], p["y"], p["z"]) for p in _data(options)] == [(1.0, 3.0, 5.0), (2.0, 4.0, 6.0)]


def test_treemap_nodes_carry_percent_and_top_level_colors(settings: ChartSettings) -> None:
    """Flat treemap input becomes one level of colored nodes."""

    options = recompute("treemap", {"labels": ["A", "B"], "values": [1, 3]}, settings=settings).options
    data = _data(options)

    assert options["series"][0]["layoutAlgorithm"] == "squarified"
    assert [(node["id"], node["custom"]["percent"]) for node in data] == [("0", 25.0), ("1", 75.0)]
    assert [node["color"] for node in data] == list(DEFAULT_PALETTE[:2])
    assert all("parent" not in node for node in data)


def test_sunburst_hangs_top_level_nodes_off_implicit_root(settings: ChartSettings) -> None:
    """The sunburst root node is added and pre-linked parents are kept."""

    options = recompute(
        "sunburst",
        {"labels": ["A", "A1"], "values": [4, 4], "ids": ["a", "a1"], "parents": ["", "a"], "title": "All"},
        settings=settings,
    ).options
    data = _data(options)

    assert data[0] == {"id": SUNBURST_ROOT_ID, "parent": "", "name": "All"}
    assert data[1]["parent"] == SUNBURST_ROOT_ID
    assert data[2]["parent"] == "a"
    assert data[2]["custom"]["percent"] == 100.0


def test_hierarchy_with_zero_values_has_zero_percents(settings: ChartSettings) -> None:
    """A zero-sum level renders instead of failing."""

    options = recompute("treemap", {"labels": ["A", "B", "C"], "values": [0, 0, 0]}, settings=settings).options

    assert [node["custom"]["percent"] for node in _data(options)] == [0.0, 0.0, 0.0]


def test_morph_scatter_renders_current_mode(settings: ChartSettings) -> None:
    """Morph charts start in the requested mode and expose their morph points."""

    snapshot = {"labels": ["A"], "x": [1], "y": [2], "xAlt": [5], "yAlt": [6]}

    primary = recompute("morph_scatter", snapshot, settings=settings)
    alternate = recompute("morph_scatter", {**snapshot, "alternateMode": True}, settings=settings)
    forced = recompute("morph_scatter", snapshot, settings=settings, morph_mode=MorphMode.alternate)

    assert primary.morph_mode is MorphMode.primary
    assert (_data(primary.options)[0]["x"], _data(primary.options)[0]["y"]) == (1.0, 2.0)
    assert alternate.morph_mode is MorphMode.alternate
    assert (_data(alternate.options)[0]["x"], _data(alternate.options)[0]["y"]) == (5.0, 6.0)
    assert forced.morph_mode is MorphMode.alternate

    controller = build_morph_controller(primary)
    assert controller is not None
    controller.toggle()
    assert controller.position(0, 0) == (5.0, 6.0)


def test_build_morph_controller_is_none_for_static_charts(settings: ChartSettings) -> None:
    """Only morph charts get a controller."""

    assert build_morph_controller(recompute("pie", {}, settings=settings)) is None


def test_degraded_snapshot_renders_with_warnings(settings: ChartSettings) -> None:
    """Short arrays pad with None and are reported, never raised."""

    with capture_logs() as logs:
        rendered = recompute("bar", {"labels": ["A", "B", "C"], "values": [1]}, settings=settings)

    assert [point["y"] for point in _data(rendered.options)] == [1.0, None, None]
    assert rendered.warnings
    assert any(entry["event"] == "chart_input_degraded" for entry in logs)


def test_empty_snapshot_renders_empty_series(settings: ChartSettings) -> None:
    """Missing inputs produce an empty but complete option dictionary."""

    options = recompute("line", {}, settings=settings).options

    assert _data(options) == []
    assert options["title"] == {"text": None}


def test_recompute_rejects_unknown_component(settings: ChartSettings) -> None:
    """Unknown component ids raise KeyError."""

    with pytest.raises(KeyError):
        recompute("radar", {}, settings=settings)


def test_recompute_does_not_merge_with_previous_output(settings: ChartSettings) -> None:
    """Each recompute is built from its own snapshot only."""

    first = recompute("pie", {"labels": ["A", "B"], "values": [1, 2]}, settings=settings)
    second = recompute("pie", {"labels": ["C"], "values": [3]}, settings=settings)

    assert len(_data(first.options)) == 2
    assert [point["name"] for point in _data(second.options)] == ["C"]


def test_out_of_range_integers_read_as_unset(settings: ChartSettings) -> None:
    """Integers too large for a float are reported instead of raised."""

    rendered = recompute("bar", {"labels": ["A", "B"], "values": [10**400, 2]}, settings=settings)

    assert [point["y"] for point in _data(rendered.options)] == [None, 2.0]
    assert any("non-numeric" in warning for warning in rendered.warnings)

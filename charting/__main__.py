"""Command line entry point: `python -m charting`."""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys

from .configs import get_component, list_components
from .log_config import configure_logging
from .render import recompute
from .schema import ChartComponent, InputField
from .settings import ChartSettings, load_settings
from .snapshot_codec import dump_snapshot_yaml, load_snapshot_yaml


def _list_components() -> int:
    for component in list_components():
        print(f"{component.id}\t{component.title}\t{', '.join(component.field_names())}")
    return 0


def _placeholder(input_field: InputField) -> object:
    if input_field.field_type.endswith("_array"):
        return []
    if input_field.field_type == "boolean":
        return False
    return None


def snapshot_template(component: ChartComponent) -> dict[str, object]:
    """Return an empty snapshot with one entry per field of `component`."""

    return {input_field.name: _placeholder(input_field) for input_field in component.fields}


def _resolve_component(component_id: str) -> ChartComponent | None:
    try:
        return get_component(component_id)
    except KeyError as exc:
        print(exc.args[0], file=sys.stderr)
        return None


def _template(component_id: str) -> int:
    component = _resolve_component(component_id)
    if component is None:
        return 2
    sys.stdout.write(dump_snapshot_yaml(snapshot_template(component)))
    return 0


def _render(component_id: str, snapshot_path: str, settings: ChartSettings) -> int:
    component = _resolve_component(component_id)
    if component is None:
        return 2
    try:
        snapshot = load_snapshot_yaml(snapshot_path)
    except (OSError, ValueError) as exc:
        print(f"Could not read snapshot {snapshot_path}: {exc}", file=sys.stderr)
        return 2

    rendered = recompute(component, snapshot, settings=settings)
    report = {
        "component": component.id,
        "options": rendered.options,
        "warnings": list(rendered.warnings),
    }
    if rendered.morph_mode is not None:
        report["morphMode"] = rendered.morph_mode.value
    print(json.dumps(report, indent=2, sort_keys=True))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the chart CLI and return a process exit code."""

    parser = argparse.ArgumentParser(prog="charting", description="Render declarative chart components.")
    parser.add_argument("--json-logs", action="store_true", help="Emit log events as JSON lines.")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("components", help="List built-in chart components.")
    template = subparsers.add_parser("template", help="Print an empty YAML snapshot for a component.")
    template.add_argument("component", help="Component id, e.g. `pie`.")
    render = subparsers.add_parser("render", help="Print the option dictionary for a snapshot.")
    render.add_argument("component", help="Component id, e.g. `pie`.")
    render.add_argument("snapshot", help="Path to a YAML snapshot of field values.")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"Invalid chart settings: {exc}", file=sys.stderr)
        return 2
    if args.json_logs:
        settings = dataclasses.replace(settings, log_json=True)
    configure_logging(settings)

    if args.command == "components":
        return _list_components()
    if args.command == "template":
        return _template(args.component)
    return _render(args.component, args.snapshot, settings)


if __name__ == "__main__":
    raise SystemExit(main())

"""Validation for chart component definitions and input snapshots.

Component definitions ship with the library, so their validation is strict
and fails fast at import. Input snapshots come from host state and are never
rejected: problems are reported as warnings and the renderer degrades
gracefully.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from seriesengine.inputs import to_number

from .schema import ChartComponent, ChartKind

REQUIRED_FIELDS: Final[dict[ChartKind, frozenset[str]]] = {
    "pie": frozenset({"labels", "values"}),
    "bar": frozenset({"labels", "values"}),
    "line": frozenset({"labels", "values"}),
    "dual_axis": frozenset({"labels", "values", "secondaryValues"}),
    "bubble": frozenset({"labels", "x", "y", "z"}),
    "treemap": frozenset({"labels", "values"}),
    "sunburst": frozenset({"labels", "values"}),
    "morph_scatter": frozenset({"labels", "x", "y", "xAlt", "yAlt"}),
}

CARTESIAN_KINDS: Final[frozenset[str]] = frozenset({"bar", "line", "dual_axis"})


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating a component or a snapshot."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_component(component: ChartComponent) -> ValidationResult:
    """Validate a single ChartComponent definition.

    Args:
        component: Component to validate.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []

    if not component.id.strip():
        errors.append("ChartComponent.id must be a non-empty string.")
    if not component.title.strip():
        errors.append(f"ChartComponent[{component.id}].title must be a non-empty string.")
    if component.kind not in REQUIRED_FIELDS:
        errors.append(f"ChartComponent[{component.id}] has unknown kind={component.kind!r}.")

    names = component.field_names()
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        errors.append(f"ChartComponent[{component.id}] declares duplicate fields: {duplicates}.")

    missing = sorted(REQUIRED_FIELDS.get(component.kind, frozenset()) - set(names))
    if missing:
        errors.append(f"ChartComponent[{component.id}] is missing required fields: {missing}.")

    if component.series_type is not None and component.kind not in CARTESIAN_KINDS:
        errors.append(f"ChartComponent[{component.id}].series_type is only supported for cartesian kinds.")
    if component.kind in CARTESIAN_KINDS and component.series_type is None:
        warnings.append(f"ChartComponent[{component.id}] has no series_type; the renderer default applies.")

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def validate_components(components: Iterable[ChartComponent]) -> ValidationResult:
    """Validate a set of component definitions, including id uniqueness."""

    errors: list[str] = []
    warnings: list[str] = []
    seen: set[str] = set()
    for component in components:
        if component.id in seen:
            errors.append(f"Duplicate ChartComponent id: {component.id!r}.")
        seen.add(component.id)
        result = validate_component(component)
        errors.extend(result.errors)
        warnings.extend(result.warnings)
    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def validate_snapshot(component: ChartComponent, snapshot: Mapping[str, object]) -> ValidationResult:
    """Report problems in a host snapshot without rejecting it.

    Args:
        component: Component the snapshot feeds.
        snapshot: Raw field values read from host state.

    Returns:
        ValidationResult that is always valid; problems are warnings.
    """

    warnings: list[str] = []
    labels = snapshot.get("labels")
    label_count = len(labels) if _is_array(labels) else 0

    for field in component.fields:
        raw = snapshot.get(field.name)
        if raw is None:
            continue
        if field.field_type.endswith("_array"):
            if not _is_array(raw):
                warnings.append(f"{field.name}: expected an array, got {type(raw).__name__}; treated as empty.")
                continue
            if field.name != "labels" and field.name in _ALIGNED_FIELDS and len(raw) < label_count:
                warnings.append(
                    f"{field.name}: {len(raw)} entries for {label_count} labels; missing entries are treated as unset."
                )
            if field.field_type == "number_array":
                invalid = sum(1 for item in raw if item is not None and to_number(item) is None)
                if invalid:
                    warnings.append(f"{field.name}: {invalid} non-numeric entries are treated as unset.")
        elif field.field_type == "number" and to_number(raw) is None:
            warnings.append(f"{field.name}: expected a number, got {raw!r}; ignored.")

    return ValidationResult(is_valid=True, warnings=tuple(warnings))


_ALIGNED_FIELDS: Final[frozenset[str]] = frozenset(
    {"values", "secondaryValues", "groups", "x", "y", "z", "xAlt", "yAlt", "ids", "parents"}
)


def _is_array(raw: object) -> bool:
    return isinstance(raw, Sequence) and not isinstance(raw, (str, bytes))

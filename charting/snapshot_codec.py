"""Read and write input snapshots as YAML or JSON-compatible payloads.

Snapshots are plain mappings of field name to value. Fixtures and the CLI
store them as YAML documents; tuples are written as lists.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

import yaml


def _plain(value: object) -> object:
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return [_plain(item) for item in value]
    return value


def encode_snapshot(snapshot: Mapping[str, object]) -> dict[str, object]:
    """Return a JSON/YAML-serializable copy of a snapshot."""

    return {str(name): _plain(value) for name, value in snapshot.items()}


def decode_snapshot(payload: object) -> dict[str, object]:
    """Validate a decoded document and return it as a snapshot.

    Args:
        payload: Result of `yaml.safe_load` or `json.loads`. An empty document
            (None) decodes to an empty snapshot.

    Returns:
        Snapshot keyed by field name.

    Raises:
        ValueError: When the payload is not a mapping.
    """

    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValueError(f"Snapshot must be a mapping of field names, got {type(payload).__name__}.")
    return {str(name): value for name, value in payload.items()}


def load_snapshot_yaml(path: str | Path) -> dict[str, object]:
    """Load a snapshot from a YAML file.

    Raises:
        ValueError: When the document is not a mapping.
    """

    raw = Path(path).read_text(encoding="utf-8")
    return decode_snapshot(yaml.safe_load(raw))


def dump_snapshot_yaml(snapshot: Mapping[str, object]) -> str:
    """Return a snapshot as a YAML document with keys in insertion order."""

    return yaml.safe_dump(encode_snapshot(snapshot), sort_keys=False, allow_unicode=True)

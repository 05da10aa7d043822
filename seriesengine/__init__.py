"""Pure data-to-series transformation engine.

This package contains deterministic, testable transformations that operate on
in-memory parallel arrays and return DTOs. It must not import the charting
package, any rendering library, or perform I/O.
"""

from .assembler import assemble_series
from .colors import DEFAULT_PALETTE, resolve_color
from .grouping import group_points
from .hierarchy import build_flat_hierarchy, build_hierarchy
from .morph import CoordinateMorphController

__all__ = [
    "DEFAULT_PALETTE",
    "CoordinateMorphController",
    "assemble_series",
    "build_flat_hierarchy",
    "build_hierarchy",
    "group_points",
    "resolve_color",
]

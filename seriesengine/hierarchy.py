"""Build parent/child nodes for treemap and sunburst layouts.

Two input shapes are supported:

- pre-linked records carrying explicit parent ids (`build_hierarchy`), and
- flat label/value/color arrays (`build_flat_hierarchy`), which become a
  single level under the implicit root.

Percentages are computed against the sibling total under the same parent and
are recomputed on every call. Rounded sibling percentages always add up to
exactly 100 unless the sibling total is zero. Only top-level nodes receive a palette color;
deeper levels keep their explicit color or none at all.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .colors import explicit_color, group_color
from .dto import HierarchyNode
from .inputs import number_at, text_at


@dataclass(frozen=True, slots=True)
class HierarchyInput:
    """A pre-linked node as supplied by the host.

    Args:
        id: Node identifier.
        parent: Parent identifier, or None/"" for top-level nodes.
        name: Display name.
        value: Node value, or None when missing.
        color: Optional explicit color.
    """

    id: str
    parent: str | None
    name: str | None
    value: float | None
    color: str | None = None


def sibling_percents(values: Sequence[float | None]) -> tuple[float, ...]:
    """Return one-decimal percentages of a sibling set that sum to exactly 100.

    Each share is rounded half-up first. Any tenths left over or overshot by
    rounding are then handed out by largest remainder, ties in input order.

    Args:
        values: Sibling values (None counts as zero).

    Returns:
        Percentages aligned to `values`; all 0.0 when the sibling total is zero.
    """

    total = sum(value or 0.0 for value in values)
    if not total:
        return tuple(0.0 for _ in values)

    exact = [Decimal(repr((value or 0.0) / total * 1000)) for value in values]
    tenths = [int(share.quantize(Decimal("1"), rounding=ROUND_HALF_UP)) for share in exact]
    shortfall = 1000 - sum(tenths)
    if shortfall:
        step = 1 if shortfall > 0 else -1
        remainders = [share - rounded for share, rounded in zip(exact, tenths)]
        order = sorted(range(len(tenths)), key=lambda idx: remainders[idx], reverse=step > 0)
        for idx in order[: abs(shortfall)]:
            tenths[idx] += step
    return tuple(float(Decimal(rounded) / 10) for rounded in tenths)


def build_hierarchy(
    nodes: Iterable[HierarchyInput],
    *,
    palette: Sequence[str] = (),
    root_id: str | None = None,
) -> tuple[HierarchyNode, ...]:
    """Augment pre-linked nodes with sibling percentages and top-level colors.

    Args:
        nodes: Pre-linked nodes in display order.
        palette: Palette cycled over top-level nodes (default palette if empty).
        root_id: Optional explicit root id. Children of this node count as
            top-level; the root node itself is passed through uncolored.

    Returns:
        New HierarchyNode records in input order.
    """

    items = tuple(nodes)
    known_ids = {node.id for node in items}

    def sibling_key(node: HierarchyInput) -> str | None:
        parent = node.parent or None
        if parent is not None and parent not in known_ids:
            return None
        return parent

    siblings: dict[str | None, list[int]] = {}
    for idx, node in enumerate(items):
        siblings.setdefault(sibling_key(node), []).append(idx)

    percents: dict[int, float] = {}
    for members in siblings.values():
        shares = sibling_percents([items[idx].value for idx in members])
        percents.update(zip(members, shares))

    top_level_order = 0
    built: list[HierarchyNode] = []
    for idx, node in enumerate(items):
        key = sibling_key(node)
        color = node.color if node.color and node.color.strip() else None
        is_top_level = node.id != root_id and (key is None if root_id is None else key == root_id)
        if is_top_level:
            if color is None:
                color = group_color(top_level_order, palette)
            top_level_order += 1
        built.append(
            HierarchyNode(
                id=node.id,
                parent_id=node.parent or None,
                name=node.name,
                value=node.value,
                percent=percents[idx],
                color=color,
            )
        )
    return tuple(built)


def build_flat_hierarchy(
    labels: Sequence[object],
    values: Sequence[object] | None,
    colors: Sequence[str | None] = (),
    *,
    palette: Sequence[str] = (),
    ids: Sequence[object] | None = None,
    parents: Sequence[object] | None = None,
    root_id: str | None = None,
) -> tuple[HierarchyNode, ...]:
    """Build hierarchy nodes from parallel arrays.

    Without `parents` every label becomes a top-level node under the implicit
    root. With `parents` the arrays are treated as pre-linked records.

    Args:
        labels: Node names; their length defines the number of nodes.
        values: Node values aligned to labels.
        colors: Per-index explicit colors.
        palette: Palette cycled over top-level nodes.
        ids: Optional node ids (defaults to the index as a string).
        parents: Optional parent ids aligned to labels.
        root_id: Optional explicit root id, see `build_hierarchy`.

    Returns:
        HierarchyNode records in input order.
    """

    records = (
        HierarchyInput(
            id=text_at(ids, idx) or str(idx),
            parent=text_at(parents, idx),
            name=text_at(labels, idx),
            value=number_at(values, idx),
            color=explicit_color(idx, colors),
        )
        for idx in range(len(labels))
    )
    return build_hierarchy(records, palette=palette, root_id=root_id)

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Literal

from ..models.column import CellProps, Column, ColumnKind

"""Column tree walkers.

All walkers dispatch on ``Column.kind``; traversal is depth-first and keeps
sibling order.
"""

__all__ = [
    "collect_nodes",
    "is_leaf",
    "safe_get_cell_props",
    "safe_get_value",
    "tree_depth",
    "visible_leaves",
]

CollectOrder = Literal["pre", "post", "leaf-only"]


def is_leaf(column: Column) -> bool:
    return column.kind is ColumnKind.LEAF or not column.children


def tree_depth(columns: Sequence[Column]) -> int:
    """Depth of group nesting: 0 for a flat list of leaves.

    Every node counts, including ``no_export`` ones, so the header height does
    not depend on which columns are exported.
    """
    depth = 0
    for col in columns:
        if not is_leaf(col):
            depth = max(depth, tree_depth(col.children) + 1)
    return depth


def collect_nodes(columns: Iterable[Column], order: CollectOrder = "pre") -> list[Column]:
    """Flatten the tree depth-first.

    order:
        "pre": parents before their children
        "post": children before their parents
        "leaf-only": only leaves
    """
    if order not in ("pre", "post", "leaf-only"):
        raise ValueError(f"unknown collect order: {order!r}")
    result: list[Column] = []

    def dfs(cols: Iterable[Column]) -> None:
        for col in cols:
            if is_leaf(col):
                result.append(col)
                continue
            if order == "pre":
                result.append(col)
            dfs(col.children)
            if order == "post":
                result.append(col)

    dfs(columns)
    return result


def visible_leaves(columns: Iterable[Column]) -> list[Column]:
    """Leaf columns in left-to-right order, with ``no_export`` subtrees removed."""
    result: list[Column] = []
    for col in columns:
        if col.no_export:
            continue
        if is_leaf(col):
            result.append(col)
        else:
            result.extend(visible_leaves(col.children))
    return result


def safe_get_value(column: Column, record: Any, row_index: int) -> Any:
    if column.get_value is not None:
        return column.get_value(record, row_index)
    if column.code is None or record is None:
        return None
    if isinstance(record, dict):
        return record.get(column.code)
    return getattr(record, column.code, None)


def safe_get_cell_props(column: Column, record: Any, row_index: int) -> CellProps:
    if column.cell_props is None:
        return CellProps()
    return column.cell_props(record, row_index) or CellProps()

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..models.column import CellProps, Column, group, leaf

"""Build a column tree from config entries.

Config entries are plain mappings (already validated against the JSON schema):

    name            header label (required)
    code            record key of a leaf column
    children        child entries of a group column
    no_export       drop the column and its subtree from the export
    merge_repeated  merge runs of equal values vertically (leaf only)
    row_span_field  record key holding the cell's rowSpan (leaf only)
    col_span_field  record key holding the cell's colSpan (leaf only)
"""

__all__ = [
    "ColumnConfigError",
    "build_columns",
]

_LEAF_ONLY_KEYS = ("merge_repeated", "row_span_field", "col_span_field")


class ColumnConfigError(Exception):
    """Raised when a column entry cannot be turned into a column."""


def _optional_span(value: Any, field: str) -> int | None:
    if value is None:
        return None
    span = int(value)
    if span < 1:
        raise ValueError(f"{field} must be at least 1, got {value!r}")
    return span


def _repeated_run_props(code: str, data_source: Sequence[Any]):
    def cell_props(record: Any, row_index: int) -> CellProps:
        value = record.get(code)
        if value is None:
            return CellProps()
        end = row_index + 1
        while end < len(data_source) and data_source[end].get(code) == value:
            end += 1
        return CellProps(row_span=end - row_index)

    return cell_props


def _field_props(row_field: str | None, col_field: str | None):
    def cell_props(record: Any, row_index: int) -> CellProps:
        return CellProps(
            row_span=_optional_span(record.get(row_field), row_field) if row_field else None,
            col_span=_optional_span(record.get(col_field), col_field) if col_field else None,
        )

    return cell_props


def _build_one(entry: dict[str, Any], data_source: Sequence[Any], path: str) -> Column:
    name = str(entry["name"])
    where = f"{path}/{name}"
    children = entry.get("children")
    no_export = bool(entry.get("no_export", False))

    if children:
        if "code" in entry:
            raise ColumnConfigError(f"column '{where}' has both children and code")
        misplaced = [k for k in _LEAF_ONLY_KEYS if k in entry]
        if misplaced:
            raise ColumnConfigError(f"group column '{where}' cannot use {misplaced}")
        return group(
            name,
            [_build_one(child, data_source, where) for child in children],
            no_export=no_export,
        )

    code = entry.get("code")
    if code is None:
        raise ColumnConfigError(f"leaf column '{where}' requires code")

    row_field = entry.get("row_span_field")
    col_field = entry.get("col_span_field")
    if entry.get("merge_repeated") and (row_field or col_field):
        raise ColumnConfigError(
            f"column '{where}': merge_repeated cannot be combined with span fields"
        )

    cell_props = None
    if entry.get("merge_repeated"):
        cell_props = _repeated_run_props(code, data_source)
    elif row_field or col_field:
        cell_props = _field_props(row_field, col_field)

    return leaf(name, code, cell_props=cell_props, no_export=no_export)


def build_columns(entries: Sequence[dict[str, Any]], data_source: Sequence[Any] = ()) -> list[Column]:
    """Turn config entries into columns.

    ``data_source`` is only consulted by ``merge_repeated`` columns, which look
    ahead to find how far a run of equal values reaches.
    """
    return [_build_one(entry, data_source, "") for entry in entries]

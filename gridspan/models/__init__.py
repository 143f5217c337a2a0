"""Domain models for hierarchical table export.

Column tree nodes, span rectangles, grid coordinates and export results.
"""

from .column import CellProps, Column, ColumnFeatures, ColumnKind, SpanRect, group, leaf
from .export_result import ExportResult
from .grid import CellAddress, CellDatum, MergeRange

__all__ = [
    # Column tree
    "CellProps",
    "Column",
    "ColumnFeatures",
    "ColumnKind",
    "SpanRect",
    "group",
    "leaf",
    # Grid
    "CellAddress",
    "CellDatum",
    "MergeRange",
    # Results
    "ExportResult",
]

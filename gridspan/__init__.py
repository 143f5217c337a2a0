"""Hierarchical table export with merged (rowSpan/colSpan) cells."""

from .core.column_tree import collect_nodes, is_leaf, tree_depth, visible_leaves
from .core.span_tracker import SpanTracker, SpanTrackerError
from .excel.sink import GridSink, OpenpyxlSheetSink, SheetGrid
from .models import CellProps, Column, ColumnKind, ExportResult, MergeRange, SpanRect, group, leaf
from .services.exporter import HierarchicalGridExporter, export_table, export_table_as_excel

__all__ = [
    "CellProps",
    "Column",
    "ColumnKind",
    "ExportResult",
    "GridSink",
    "HierarchicalGridExporter",
    "MergeRange",
    "OpenpyxlSheetSink",
    "SheetGrid",
    "SpanRect",
    "SpanTracker",
    "SpanTrackerError",
    "collect_nodes",
    "export_table",
    "export_table_as_excel",
    "group",
    "is_leaf",
    "leaf",
    "tree_depth",
    "visible_leaves",
]

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import numpy as np

from ..core.column_tree import is_leaf, safe_get_cell_props, safe_get_value, tree_depth, visible_leaves
from ..core.span_tracker import SpanTracker
from ..excel.sink import GridSink, OpenpyxlSheetSink
from ..models.column import Column, SpanRect
from ..models.export_result import ExportResult
from ..models.grid import CellAddress, CellDatum, MergeRange
from .progress import ProgressTracker

"""Hierarchical grid exporter.

Lays out a column tree as a multi-row header, then the data source row by row
underneath it, emitting values and merge instructions to a sink.

Header pass: depth-first, left to right. A leaf is one column wide and merged
down to the bottom of the header block; a group is as wide as its visible
children and merged across one row.

Data pass: row-major. Each cell is either covered by an earlier merge (left
absent) or is an origin: its span is resolved, registered, merged and its
sanitized value is written.

Span rectangles are not checked against the data window. A span reaching past
the last data row produces a merge that extends past the table.
"""

__all__ = [
    "HierarchicalGridExporter",
    "export_table",
    "export_table_as_excel",
    "resolve_span_rect",
    "sanitize_cell_datum",
]

logger = logging.getLogger(__name__)


def sanitize_cell_datum(value: Any) -> CellDatum:
    """Map values a spreadsheet cannot store (NaN, +/-Infinity) to None."""
    if isinstance(value, (float, np.floating)) and not np.isfinite(value):
        return None
    return value


def resolve_span_rect(column: Column, record: Any, row_index: int, col_index: int) -> SpanRect:
    """Span of the cell at (row_index, col_index), in data-relative coordinates.

    ``get_span_rect`` wins over ``cell_props``. Only the bottom/right edges of a
    returned rectangle matter; the origin is always the current cell.
    """
    row_span = 1
    col_span = 1
    if column.get_span_rect is not None:
        value = safe_get_value(column, record, row_index)
        rect = column.get_span_rect(value, record, row_index)
        if rect is not None:
            col_span = rect.right - col_index
            row_span = rect.bottom - row_index
    else:
        props = safe_get_cell_props(column, record, row_index)
        if props.col_span is not None:
            col_span = props.col_span
        if props.row_span is not None:
            row_span = props.row_span

    return SpanRect(
        top=row_index,
        left=col_index,
        bottom=row_index + row_span,
        right=col_index + col_span,
    )


class HierarchicalGridExporter:
    def __init__(
        self,
        columns: Sequence[Column],
        sink: GridSink,
        *,
        progress: ProgressTracker | None = None,
    ) -> None:
        self.columns = list(columns)
        self.sink = sink
        self.progress = progress
        self.header_height = tree_depth(self.columns) + 1
        self.leaf_columns = visible_leaves(self.columns)
        self.merge_count = 0

    def export(self, data_source: Sequence[Any], origin: CellAddress | None = None) -> ExportResult:
        start = time.perf_counter()
        origin = origin or CellAddress(row=0, col=0)
        width = self.add_top_headers(origin)
        rows = self.add_data_part(data_source, origin.move(0, self.header_height))
        elapsed = time.perf_counter() - start
        logger.debug(
            "export finished header_rows=%s data_rows=%s columns=%s merges=%s",
            self.header_height, rows, width, self.merge_count,
        )
        return ExportResult(
            header_rows=self.header_height,
            data_rows=rows,
            columns=width,
            merges=self.merge_count,
            elapsed_seconds=elapsed,
        )

    def add_top_headers(self, origin: CellAddress) -> int:
        """Place header cells below ``origin``; returns the total width."""

        def dfs(cols: Sequence[Column], start_dx: int, start_dy: int) -> int:
            start = origin.move(start_dx, start_dy)
            offset_x = 0
            for col in cols:
                if col.no_export:
                    continue
                current = start.move(offset_x, 0)
                if is_leaf(col):
                    self.sink.write_cell(current.row, current.col, col.name)
                    self._merge_cells(current, 1, self.header_height - start_dy)
                    offset_x += 1
                    continue
                children_width = dfs(col.children, start_dx + offset_x, start_dy + 1)
                # A group with nothing left to export takes no space
                if children_width == 0:
                    continue
                self.sink.write_cell(current.row, current.col, col.name)
                self._merge_cells(current, children_width, 1)
                offset_x += children_width
            return offset_x

        return dfs(self.columns, 0, 0)

    def add_data_part(self, data_source: Sequence[Any], origin: CellAddress) -> int:
        """Place data cells below the header; returns the number of rows written."""
        tracker = SpanTracker()
        data_part: list[list[CellDatum]] = []

        for row_index, record in enumerate(data_source):
            tracker.strip_upwards(row_index)
            row: list[CellDatum] = []
            # Columns covered by a span opened earlier on this same row
            covered_until = 0
            for col_index, col in enumerate(self.leaf_columns):
                if col_index < covered_until or tracker.test_skip(row_index, col_index):
                    row.append(None)
                    continue

                rect = resolve_span_rect(col, record, row_index, col_index)
                if not rect.is_single:
                    tracker.add(rect.top, rect.left, rect.col_span, rect.row_span)
                    self._merge_cells(origin.move(rect.left, rect.top), rect.col_span, rect.row_span)
                    covered_until = rect.right

                row.append(sanitize_cell_datum(safe_get_value(col, record, row_index)))
            data_part.append(row)
            if self.progress is not None:
                self.progress.update()

        self.sink.write_block(origin.row, origin.col, data_part)
        return len(data_part)

    def _merge_cells(self, address: CellAddress, width: int, height: int) -> None:
        if width == 1 and height == 1:
            return
        self.sink.add_merge(MergeRange.from_origin(address, width, height))
        self.merge_count += 1


def export_table(
    data_source: Sequence[Any],
    columns: Sequence[Column],
    sink: GridSink,
    *,
    progress: ProgressTracker | None = None,
) -> ExportResult:
    return HierarchicalGridExporter(columns, sink, progress=progress).export(data_source)


def export_table_as_excel(
    data_source: Sequence[Any],
    columns: Sequence[Column],
    filename: str | Path,
    sheet_name: str = "Sheet1",
) -> ExportResult:
    """Export ``data_source`` to an .xlsx file.

    Columns flagged ``no_export`` are left out together with their children.
    Grouped headers and rowSpan/colSpan cells are written as merged regions.
    """
    sink = OpenpyxlSheetSink(sheet_name=sheet_name)
    result = export_table(data_source, columns, sink)
    sink.save(Path(filename))
    return result

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import pandas as pd
from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from ..models.grid import CellDatum, MergeRange

"""Destination sinks for exported grids.

A sink accepts single cells, rectangular blocks anchored at an origin, and
inclusive merge instructions. Coordinates are 0-based; the openpyxl sink
translates them to 1-based worksheet coordinates.

Block writes leave the destination untouched for ``None`` entries, so cells
covered by a merge stay absent.
"""

__all__ = [
    "GridSink",
    "OpenpyxlSheetSink",
    "SheetGrid",
]

logger = logging.getLogger(__name__)


class GridSink(Protocol):
    def write_cell(self, row: int, col: int, value: CellDatum) -> None: ...

    def write_block(self, origin_row: int, origin_col: int, rows: Sequence[Sequence[CellDatum]]) -> None: ...

    def add_merge(self, merge: MergeRange) -> None: ...


class SheetGrid:
    """In-memory sparse grid. Used for dry runs and tests."""

    def __init__(self) -> None:
        self._cells: dict[tuple[int, int], CellDatum] = {}
        self.merges: list[MergeRange] = []

    def write_cell(self, row: int, col: int, value: CellDatum) -> None:
        self._cells[(row, col)] = value

    def write_block(self, origin_row: int, origin_col: int, rows: Sequence[Sequence[CellDatum]]) -> None:
        for dy, values in enumerate(rows):
            for dx, value in enumerate(values):
                if value is None:
                    continue
                self._cells[(origin_row + dy, origin_col + dx)] = value

    def add_merge(self, merge: MergeRange) -> None:
        self.merges.append(merge)

    def __contains__(self, address: tuple[int, int]) -> bool:
        return address in self._cells

    def get(self, row: int, col: int) -> CellDatum:
        return self._cells.get((row, col))

    @property
    def n_rows(self) -> int:
        rows = [r for r, _ in self._cells] + [m.end_row for m in self.merges]
        return max(rows) + 1 if rows else 0

    @property
    def n_cols(self) -> int:
        cols = [c for _, c in self._cells] + [m.end_col for m in self.merges]
        return max(cols) + 1 if cols else 0

    def rows(self) -> list[list[CellDatum]]:
        """Dense rows, absent cells filled with None."""
        n_cols = self.n_cols
        return [[self._cells.get((r, c)) for c in range(n_cols)] for r in range(self.n_rows)]

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows())


class OpenpyxlSheetSink:
    """Writes into an openpyxl worksheet; ``save`` serializes the workbook."""

    def __init__(self, sheet_name: str = "Sheet1", workbook: Workbook | None = None) -> None:
        if workbook is None:
            workbook = Workbook()
            ws = workbook.active
            ws.title = sheet_name
        else:
            ws = workbook.create_sheet(title=sheet_name)
        self.workbook = workbook
        self.worksheet: Worksheet = ws

    def write_cell(self, row: int, col: int, value: CellDatum) -> None:
        self.worksheet.cell(row=row + 1, column=col + 1, value=value)

    def write_block(self, origin_row: int, origin_col: int, rows: Sequence[Sequence[CellDatum]]) -> None:
        for dy, values in enumerate(rows):
            for dx, value in enumerate(values):
                if value is None:
                    continue
                self.worksheet.cell(row=origin_row + dy + 1, column=origin_col + dx + 1, value=value)

    def add_merge(self, merge: MergeRange) -> None:
        self.worksheet.merge_cells(
            start_row=merge.start_row + 1,
            start_column=merge.start_col + 1,
            end_row=merge.end_row + 1,
            end_column=merge.end_col + 1,
        )

    def save(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.workbook.save(path)
        logger.debug("workbook saved: %s", path)
        return path

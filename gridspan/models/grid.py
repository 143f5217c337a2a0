from __future__ import annotations

from dataclasses import dataclass
from typing import Union

"""Destination grid primitives: cell addresses and merge instructions."""

__all__ = [
    "CellAddress",
    "CellDatum",
    "MergeRange",
]

CellDatum = Union[str, int, float, None]


@dataclass(frozen=True)
class CellAddress:
    """Absolute 0-based grid coordinate."""
    row: int
    col: int

    def move(self, d_col: int, d_row: int) -> CellAddress:
        return CellAddress(row=self.row + d_row, col=self.col + d_col)


@dataclass(frozen=True)
class MergeRange:
    """Merge instruction with inclusive end coordinates."""
    start_row: int
    start_col: int
    end_row: int
    end_col: int

    @staticmethod
    def from_origin(origin: CellAddress, width: int, height: int) -> MergeRange:
        return MergeRange(
            start_row=origin.row,
            start_col=origin.col,
            end_row=origin.row + height - 1,
            end_col=origin.col + width - 1,
        )

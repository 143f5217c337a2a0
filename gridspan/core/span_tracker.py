from __future__ import annotations

import logging
from collections import deque

"""Merged-region tracking for grids produced one row at a time.

The tracker only remembers rows that are still covered by a span opened on an
earlier row. Coverage is stored per row offset from the cursor, so memory is
bounded by the tallest span in flight rather than by the table size.

Usage contract:
- call ``strip_upwards(row)`` once per row, with strictly increasing rows
- then ``test_skip`` / ``add`` for cells of that row
Violations raise ``SpanTrackerError`` instead of silently corrupting state.
"""

__all__ = [
    "SpanTracker",
    "SpanTrackerError",
]

logger = logging.getLogger(__name__)


class SpanTrackerError(Exception):
    """Raised when the row-advancement contract is violated."""


class SpanTracker:
    def __init__(self) -> None:
        self._cursor: int | None = None
        # _rows[i] holds covered column indices for row (cursor + i)
        self._rows: deque[set[int]] = deque()

    @property
    def cursor(self) -> int | None:
        return self._cursor

    def __len__(self) -> int:
        return len(self._rows)

    def strip_upwards(self, current_row_index: int) -> None:
        """Advance the cursor to ``current_row_index`` and drop passed rows."""
        if self._cursor is not None and current_row_index <= self._cursor:
            raise SpanTrackerError(
                f"row cursor must increase: current={self._cursor} requested={current_row_index}"
            )
        if self._cursor is not None:
            passed = current_row_index - self._cursor
            for _ in range(min(passed, len(self._rows))):
                self._rows.popleft()
        self._cursor = current_row_index

    def test_skip(self, row_index: int, col_index: int) -> bool:
        """True if the cell is covered by a span that started on an earlier row."""
        offset = self._offset(row_index)
        if offset >= len(self._rows):
            return False
        return col_index in self._rows[offset]

    def add(self, top: int, left: int, width: int, height: int) -> None:
        """Register a span whose origin cell is ``(top, left)``."""
        if width < 1 or height < 1:
            raise SpanTrackerError(f"span size must be positive: width={width} height={height}")
        offset = self._offset(top)
        last = offset + height - 1
        while len(self._rows) <= last:
            self._rows.append(set())
        columns = range(left, left + width)
        # Origin row stays writable; only the rows below it are covered
        for i in range(offset + 1, last + 1):
            self._rows[i].update(columns)
        if height > 1:
            logger.debug("span registered top=%s left=%s width=%s height=%s", top, left, width, height)

    def _offset(self, row_index: int) -> int:
        if self._cursor is None:
            raise SpanTrackerError("strip_upwards() must be called before querying rows")
        offset = row_index - self._cursor
        if offset < 0:
            raise SpanTrackerError(
                f"row {row_index} is behind the cursor ({self._cursor}) and can no longer be queried"
            )
        return offset

from __future__ import annotations

from dataclasses import dataclass

"""Export result model.

Aggregated metrics for one export pass, used for the SUMMARY output line.
"""

__all__ = [
    "ExportResult",
]


@dataclass(frozen=True)
class ExportResult:
    header_rows: int  # Rows occupied by the (possibly multi-level) header
    data_rows: int  # Rows taken from the data source
    columns: int  # Visible leaf columns written
    merges: int  # Merge instructions emitted (header + data)
    elapsed_seconds: float = 0.0

    @property
    def total_rows(self) -> int:
        return self.header_rows + self.data_rows

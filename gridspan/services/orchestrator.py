from __future__ import annotations

import logging
from pathlib import Path

from openpyxl.utils.exceptions import IllegalCharacterError

from ..config.loader import ExportConfig
from ..core.span_tracker import SpanTrackerError
from ..excel.reader import DataSourceError, read_records
from ..excel.sink import GridSink, OpenpyxlSheetSink, SheetGrid
from ..models.export_result import ExportResult
from .columns import ColumnConfigError, build_columns
from .exporter import HierarchicalGridExporter
from .progress import ProgressTracker

"""Export job orchestration.

Reads the data source named in the config, builds the column tree, runs the
exporter into a sink and, unless this is a dry run, saves the workbook.

Any failure inside the job surfaces as ExportError. An interrupted export
leaves nothing to resume; the job is simply run again.
"""

__all__ = [
    "ExportError",
    "run_export",
]

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Raised when an export job fails."""


def run_export(cfg: ExportConfig, *, dry_run: bool = False) -> ExportResult:
    source = Path(cfg.source)
    try:
        records = read_records(source, sheet=cfg.source_sheet)
    except DataSourceError as e:
        raise ExportError(str(e)) from e
    logger.info(f"read {len(records)} rows from {source}")

    try:
        columns = build_columns(cfg.columns, records)
    except ColumnConfigError as e:
        raise ExportError(f"columns: {e}") from e

    sink: GridSink
    if dry_run:
        sink = SheetGrid()
    else:
        sink = OpenpyxlSheetSink(sheet_name=cfg.sheet_name)

    with ProgressTracker(len(records)) as progress:
        exporter = HierarchicalGridExporter(columns, sink, progress=progress)
        try:
            result = exporter.export(records)
        except (KeyError, TypeError, ValueError) as e:
            raise ExportError(f"row export failed: {e}") from e
        except SpanTrackerError as e:
            raise ExportError(f"invalid span: {e}") from e
        except IllegalCharacterError as e:
            raise ExportError(f"cell value not allowed in worksheet: {e}") from e
        progress.set_postfix(merges=result.merges)

    if isinstance(sink, OpenpyxlSheetSink):
        output = Path(cfg.output)
        try:
            sink.save(output)
        except OSError as e:
            raise ExportError(f"failed to write {output}: {e}") from e
        logger.info(f"wrote {output} ({result.total_rows} rows)")
    else:
        logger.info(f"dry run: workbook not written ({result.total_rows} rows laid out)")
    return result

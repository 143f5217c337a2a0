from __future__ import annotations

from ..models.export_result import ExportResult

"""Summary line rendering for the SUMMARY output of an export run."""


def _format_seconds(seconds: float) -> str:
    # Avoid scientific notation for very small numbers
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        return f"{seconds:.6f}".rstrip('0').rstrip('.')
    return str(round(seconds, 3))


def render_summary_line(result: ExportResult) -> str:
    """Render a SUMMARY line from an ExportResult.

    Format:
    SUMMARY header_rows={h} data_rows={n} columns={c} merges={m} elapsed_sec={s}

    Examples:
        >>> result = ExportResult(header_rows=2, data_rows=10, columns=3, merges=1, elapsed_seconds=2.0)
        >>> render_summary_line(result)
        'SUMMARY header_rows=2 data_rows=10 columns=3 merges=1 elapsed_sec=2'
    """
    return (
        f"SUMMARY header_rows={result.header_rows} "
        f"data_rows={result.data_rows} "
        f"columns={result.columns} "
        f"merges={result.merges} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )

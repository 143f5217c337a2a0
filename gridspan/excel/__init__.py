"""Data source reading and spreadsheet sinks."""

"""Export services: exporter, column building, orchestration, progress, summary."""

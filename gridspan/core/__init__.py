"""Column tree walkers and merged-region tracking."""

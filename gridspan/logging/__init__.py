"""Application logging setup."""

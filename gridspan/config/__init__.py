"""Export configuration loading and validation."""

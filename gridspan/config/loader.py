from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Export config loader.

Responsibilities:
- Load the YAML export config (default config/export.yml)
- Validate it against the JSON schema shipped next to this module
- Apply defaults (sheet_name=Sheet1)
"""

__all__ = [
    "ConfigError",
    "ExportConfig",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("export_schema.json")

DEFAULT_SHEET_NAME = "Sheet1"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ExportConfig:
    source: str  # Data file (.csv / .xlsx)
    output: str  # Target .xlsx path
    columns: list[dict[str, Any]]  # Raw column tree; built by services.columns
    sheet_name: str = DEFAULT_SHEET_NAME
    source_sheet: str | None = None  # Sheet to read when source is .xlsx


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or if the
            config data fails schema validation (missing required keys, wrong
            types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> ExportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    return ExportConfig(
        source=data["source"],
        output=data["output"],
        columns=data["columns"],
        sheet_name=data.get("sheet_name", DEFAULT_SHEET_NAME),
        source_sheet=data.get("source_sheet"),
    )

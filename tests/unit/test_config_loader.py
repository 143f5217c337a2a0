from __future__ import annotations
import pytest
from pathlib import Path
from gridspan.config.loader import load_config, ConfigError


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source == "./data/sales.csv"
    assert cfg.output == "./out/sales.xlsx"
    assert cfg.sheet_name == "Sales"
    assert cfg.source_sheet is None
    assert [c["name"] for c in cfg.columns] == ["Region", "City", "Sales"]


def test_load_config_default_sheet_name(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("sheet_name: Sales\n", "")
    write_config.write_text(text, encoding="utf-8")
    assert load_config(write_config).sheet_name == "Sheet1"


def test_load_config_missing_file(temp_workdir: Path):
    missing = temp_workdir / "config" / "not_exists.yml"
    with pytest.raises(ConfigError, match="not found"):
        load_config(missing)


def test_load_config_invalid_yaml(temp_workdir: Path):
    cfg = temp_workdir / "config" / "export.yml"
    cfg.write_text("source: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(cfg)


def test_load_config_non_mapping_root(temp_workdir: Path):
    cfg = temp_workdir / "config" / "export.yml"
    cfg.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(cfg)


def test_load_config_missing_required(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("output: ./out/sales.xlsx\n", "")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_load_config_column_without_name(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("      - name: Q1\n", "      - title: Q1\n")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_empty_columns(write_config: Path):
    write_config.write_text("source: a.csv\noutput: b.xlsx\ncolumns: []\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)

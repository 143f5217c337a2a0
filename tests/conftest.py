# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from gridspan.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "out").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_csv(temp_workdir: Path) -> Path:
    csv = temp_workdir / "data" / "sales.csv"
    csv.write_text(
        "region,city,q1,q2,note\n"
        "East,Boston,10,11,a\n"
        "East,NYC,20,21,b\n"
        "West,LA,30,31,c\n",
        encoding="utf-8",
    )
    return csv


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source: ./data/sales.csv
output: ./out/sales.xlsx
sheet_name: Sales
columns:
  - name: Region
    code: region
    merge_repeated: true
  - name: City
    code: city
  - name: Sales
    children:
      - name: Q1
        code: q1
      - name: Q2
        code: q2
      - name: Note
        code: note
        no_export: true
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "export.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()

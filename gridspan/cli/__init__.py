from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config
from ..logging.init import log_summary, setup_logging
from ..services.orchestrator import ExportError, run_export
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (may set GRIDSPAN_CONFIG)
- Load and validate the export config
- Run the export and print the SUMMARY line

Config path precedence: --config > GRIDSPAN_CONFIG > config/export.yml
"""

__all__ = [
    "EXIT_FATAL",
    "EXIT_SUCCESS",
    "main",
]

EXIT_SUCCESS = 0
EXIT_FATAL = 1

DEFAULT_CONFIG_PATH = Path("config/export.yml")
CONFIG_ENV_VAR = "GRIDSPAN_CONFIG"


def _load_env_file(path: Path) -> None:
    """Load .env using python-dotenv; existing environment variables win."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Export tabular data with grouped headers and merged cells to .xlsx")
    p.add_argument("--config", type=Path, default=None, help="Export config (YAML)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--dry-run", action="store_true", help="Lay out the export without writing a file")
    return p.parse_args(argv)


def _resolve_config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def main(argv: list[str] | None = None) -> int:
    # Only read sys.argv when no explicit list is given (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    _load_env_file(Path(".env"))

    config_path = _resolve_config_path(args)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    logger.info(f"Exporting {cfg.source} -> {cfg.output}")

    try:
        result = run_export(cfg, dry_run=args.dry_run)
    except ExportError as e:
        logger.error(f"export: {e}")
        return EXIT_FATAL

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])
    return EXIT_SUCCESS

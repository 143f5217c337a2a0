from __future__ import annotations

import logging
from io import StringIO

from gridspan.logging.init import (
    LabeledFormatter,
    SUMMARY_LEVEL,
    enable_debug,
    get_logger,
    log_summary,
    reset_logging,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()

    assert logger.name == "gridspan"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert isinstance(handler.formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1


def test_logging_labeled_prefixes():
    captured_output = StringIO()

    logger = logging.getLogger("test_gridspan")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    handler = logging.StreamHandler(captured_output)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = captured_output.getvalue().strip().split('\n')
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_get_logger_sets_up_when_needed():
    reset_logging()
    logger = get_logger()
    assert logger.name == "gridspan"
    assert get_logger() is logger


def test_log_summary_writes_summary_label(capsys):
    setup_logging()
    log_summary("header_rows=1 data_rows=2")
    out = capsys.readouterr().out
    assert "SUMMARY header_rows=1 data_rows=2" in out


def test_child_loggers_share_application_handler(capsys):
    setup_logging()
    logging.getLogger("gridspan.services.orchestrator").info("from child")
    assert "INFO from child" in capsys.readouterr().out


def test_setup_logging_debug_flag_lowers_levels(capsys):
    logger = setup_logging(debug=True)
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)
    assert "DEBUG debug mode enabled" in capsys.readouterr().out


def test_enable_debug_after_setup(capsys):
    logger = setup_logging()
    logger.debug("hidden")
    enable_debug()
    logger.debug("shown")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "DEBUG shown" in out


def test_debug_lines_name_the_emitting_module(capsys):
    setup_logging(debug=True)
    capsys.readouterr()
    logging.getLogger("gridspan.core.span_tracker").debug("span registered")
    logging.getLogger("gridspan.core.span_tracker").info("plain info")
    out = capsys.readouterr().out
    assert "DEBUG core.span_tracker: span registered" in out
    assert "INFO plain info" in out

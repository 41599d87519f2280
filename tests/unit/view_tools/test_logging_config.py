"""Unit tests for logging configuration."""

import logging

from view_tools.logging_config import get_logger, log_with_context, setup_logging


def test_setup_logging_creates_handlers(tmp_path):
    """Test JSON file and console handlers are configured."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configured = setup_logging("warning", log_dir=tmp_path)
        handler_count = len(configured.handlers)
        level = configured.level
    finally:
        # Put back whatever pytest had installed
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    assert level == logging.WARNING
    assert handler_count == 2
    assert (tmp_path / "view_tools.log").exists()


def test_log_with_context_adds_fields(caplog):
    """Test extra fields end up on the log record."""
    logger = get_logger("view_tools.test")
    caplog.set_level(logging.INFO, logger="view_tools.test")

    log_with_context(logger, "info", "hello", event_type="test_event", count=2)

    record = caplog.records[-1]
    assert record.getMessage() == "hello"
    assert record.event_type == "test_event"
    assert record.count == 2

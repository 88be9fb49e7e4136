"""
Tests for structured logging.

Organization
------------
- TestFormatMessage: key=value field rendering and bound context
- TestGetLogger: caching by name
- TestConfigureLogging: level and file handler reconfiguration
"""

import logging

import pytest

from regref.core.logging import (
    LogConfig,
    StructuredLogger,
    configure_logging,
    get_logger,
)


@pytest.fixture
def restore_logging():
    yield
    configure_logging()


class TestFormatMessage:
    def test_plain_message(self):
        logger = StructuredLogger("regref.test.plain", LogConfig(console=False))

        assert logger._format_message("Indexed") == "Indexed"

    def test_fields_appended_in_order(self):
        logger = StructuredLogger("regref.test.fields", LogConfig(console=False))

        message = logger._format_message("Skipping circular", filename="a.pdf", error="x")

        assert message == "Skipping circular | filename=a.pdf | error=x"

    def test_bind_and_unbind(self):
        logger = StructuredLogger("regref.test.bind", LogConfig(console=False))

        logger.bind(source="doc.pdf")
        assert logger._format_message("Start", step=1) == "Start | source=doc.pdf | step=1"

        logger.unbind("source", "missing")
        assert logger._format_message("Start") == "Start"

    def test_call_fields_override_context(self):
        logger = StructuredLogger("regref.test.override", LogConfig(console=False))
        logger.bind(source="a.pdf")

        assert logger._format_message("m", source="b.pdf") == "m | source=b.pdf"


class TestGetLogger:
    def test_cached_by_name(self):
        assert get_logger("regref.test.cached") is get_logger("regref.test.cached")

    def test_messages_reach_standard_logging(self, caplog):
        logger = get_logger("regref.test.caplog")

        with caplog.at_level(logging.INFO, logger="regref.test.caplog"):
            logger.info("Local index built", indexed=3)

        assert "Local index built | indexed=3" in caplog.text


class TestConfigureLogging:
    def test_existing_loggers_reconfigured(self, restore_logging):
        logger = get_logger("regref.test.level")

        configure_logging(level="ERROR", console=False)

        assert logger.logger.level == logging.ERROR
        assert logger.logger.handlers == []

    def test_file_handler(self, temp_dir, restore_logging):
        log_file = temp_dir / "logs" / "regref.log"
        logger = get_logger("regref.test.file")

        configure_logging(level="DEBUG", log_file=log_file, console=False)
        logger.debug("Written to file", key="value")
        for handler in logger.logger.handlers:
            handler.flush()

        assert "Written to file | key=value" in log_file.read_text()

    def test_new_loggers_use_current_config(self, restore_logging):
        configure_logging(level="WARNING", console=False)

        logger = get_logger("regref.test.after_configure")

        assert logger.logger.level == logging.WARNING

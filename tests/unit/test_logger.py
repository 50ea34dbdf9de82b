"""Unit tests for logger configuration."""

import io
import logging

from loguru import logger as _logger

from ai_notes.config import get_config
from ai_notes.logger import (
    NOISY_LIBRARIES,
    debug,
    error,
    exception,
    get_logger,
    info,
    intercept_stdlib_logging,
    setup_logger,
    warning,
)


class TestSetupLogger:
    """Tests for setup_logger function."""

    def test_setup_logger_adds_handlers(self):
        """Test that setup_logger leaves a working logger."""
        _logger.remove()

        setup_logger()

        output = io.StringIO()
        handler_id = _logger.add(output, format="{message}")
        _logger.info("Test")
        assert "Test" in output.getvalue()
        _logger.remove(handler_id)

    def test_setup_logger_with_custom_values(self, tmp_path):
        """Test setup_logger writing to a custom file."""
        log_file = tmp_path / "test.log"

        _logger.remove()
        setup_logger(
            level="DEBUG",
            log_file=str(log_file),
            rotation="10 MB",
            retention="1 day",
        )

        _logger.info("Test message")
        _logger.remove()

        content = log_file.read_text()
        assert "Test message" in content
        assert "INFO" in content

    def test_file_handler_disabled(self, tmp_path):
        """Test that no file is written when file logging is disabled."""
        log_file = tmp_path / "disabled.log"
        config = get_config()
        config.logging.file_enabled = False

        _logger.remove()
        setup_logger(log_file=str(log_file))
        _logger.info("Test with file disabled")
        _logger.remove()

        assert not log_file.exists()

    def test_level_filters_messages(self):
        """Test that messages below the configured level are dropped."""
        config = get_config()
        config.logging.file_enabled = False
        config.logging.console_enabled = False

        _logger.remove()
        setup_logger(level="WARNING")
        output = io.StringIO()
        handler_id = _logger.add(output, format="{level} {message}", level="WARNING")

        _logger.info("quiet")
        _logger.warning("loud")

        _logger.remove(handler_id)
        assert "quiet" not in output.getvalue()
        assert "loud" in output.getvalue()


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_binds_name(self):
        """Test that get_logger binds the module name."""
        output = io.StringIO()
        handler_id = _logger.add(output, format="{extra[name]} {message}")

        get_logger("ai_notes.test").info("bound")

        _logger.remove(handler_id)
        assert "ai_notes.test bound" in output.getvalue()

    def test_get_logger_without_name(self):
        """Test that get_logger without a name returns the root logger."""
        assert get_logger() is _logger


class TestConvenienceFunctions:
    """Tests for convenience logging functions."""

    def test_levels(self):
        """Test that each helper logs at its own level."""
        output = io.StringIO()
        handler_id = _logger.add(output, format="{level}:{message}", level="DEBUG")

        debug("d")
        info("i")
        warning("w")
        error("e")

        _logger.remove(handler_id)
        lines = output.getvalue().splitlines()
        assert lines == ["DEBUG:d", "INFO:i", "WARNING:w", "ERROR:e"]

    def test_exception_function(self):
        """Test that exception logs the traceback."""
        output = io.StringIO()
        handler_id = _logger.add(output, format="{message}")

        try:
            raise ValueError("Test exception")
        except ValueError:
            exception("Exception occurred")

        _logger.remove(handler_id)
        assert "Exception occurred" in output.getvalue()
        assert "ValueError" in output.getvalue()


class TestStdlibInterception:
    """Tests for forwarding standard-library logging into loguru."""

    def test_forwards_stdlib_records(self):
        """Test that stdlib records reach loguru sinks with their logger name."""
        config = get_config()
        config.logging.file_enabled = False
        config.logging.console_enabled = False

        setup_logger(level="INFO")
        output = io.StringIO()
        handler_id = _logger.add(output, format="{extra[name]}|{level}|{message}")

        logging.getLogger("ai_notes.stdlib_test").warning("from stdlib")

        _logger.remove(handler_id)
        assert "ai_notes.stdlib_test|WARNING|from stdlib" in output.getvalue()

    def test_quiets_noisy_libraries(self):
        """Test that chatty HTTP loggers are raised to WARNING."""
        intercept_stdlib_logging("DEBUG")

        for name in NOISY_LIBRARIES:
            assert logging.getLogger(name).level == logging.WARNING

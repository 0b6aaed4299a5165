"""Tests for the logging configuration module."""

import logging

import pytest
import structlog

from cuescript.config import CueScriptSettings, configure_logging, get_logger
from cuescript.config import reset_settings as reset_config
from cuescript.config.logging import _build_formatter


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Reset logging state before each test to ensure isolation."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = root_logger.handlers.copy()

    for handler in root_logger.handlers.copy():
        root_logger.removeHandler(handler)

    yield

    for handler in root_logger.handlers.copy():
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(original_level)
    for handler in original_handlers:
        root_logger.addHandler(handler)


class TestConfigureLogging:
    """Test configure_logging."""

    def test_level_from_settings(self):
        """Test the root logger level follows the settings."""
        configure_logging(CueScriptSettings(log_level="INFO"))

        assert logging.getLogger().level == logging.INFO
        assert len(logging.getLogger().handlers) == 1

    def test_debug_level(self):
        """Test debug settings lower the level."""
        configure_logging(CueScriptSettings(log_level="DEBUG", debug=True))

        assert logging.getLogger().level == logging.DEBUG

    def test_log_file_handler(self, tmp_path):
        """Test a log file adds a file handler and creates its directory."""
        log_file = tmp_path / "logs" / "cuescript.log"

        configure_logging(CueScriptSettings(log_file=log_file, log_level="INFO"))
        structlog.get_logger("cuescript.test").info("Line added", line_number=3)
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert len(logging.getLogger().handlers) == 2
        assert log_file.parent.exists()
        assert "Line added" in log_file.read_text(encoding="utf-8")

    def test_invalid_level_raises(self):
        """Test a level unknown to the logging module is rejected."""
        settings = CueScriptSettings.model_construct(log_level="LOUD")

        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(settings)

    @pytest.mark.parametrize("log_format", ["console", "json", "structured"])
    def test_formatters(self, log_format):
        """Test every log format builds a formatter."""
        formatter = _build_formatter(log_format)

        assert isinstance(formatter, structlog.stdlib.ProcessorFormatter)


class TestGetLogger:
    """Test the cached logger accessor."""

    def test_logger_is_cached(self):
        """Test the same logger is returned for the same name."""
        assert get_logger("cuescript.cache") is get_logger("cuescript.cache")

    def test_reset_clears_cache(self):
        """Test resetting settings drops cached loggers."""
        first = get_logger("cuescript.reset")

        reset_config()

        assert get_logger("cuescript.reset") is not first

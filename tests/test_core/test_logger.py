"""
Tests for the logging module.

Tests logger setup, configuration, and output handling.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pdfshelf.core.logger import setup_logging, get_logger, LOG_FILE_NAME


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_creates_root_logger(self, reset_logger_singleton):
        """Test that setup_logging configures the root logger."""
        setup_logging(log_level="DEBUG")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG

    def test_setup_with_file_handler(self, temp_dir: Path, reset_logger_singleton):
        """Test that setup_logging creates file handler when directory provided."""
        logs_dir = temp_dir / "logs"

        setup_logging(
            log_level="INFO",
            logs_directory=logs_dir,
            max_file_size_mb=1,
            backup_count=1,
            force=True
        )

        logger = get_logger("test")
        logger.info("Test message")

        assert (logs_dir / LOG_FILE_NAME).exists()
        assert any(
            isinstance(handler, RotatingFileHandler)
            for handler in logging.getLogger().handlers
        )

    def test_setup_only_runs_once(self, reset_logger_singleton):
        """Test that setup_logging only initializes once."""
        setup_logging(log_level="DEBUG")
        initial_handlers = len(logging.getLogger().handlers)

        setup_logging(log_level="WARNING")

        assert len(logging.getLogger().handlers) == initial_handlers
        assert logging.getLogger().level == logging.DEBUG

    def test_force_replaces_handlers(self, reset_logger_singleton):
        """Test that force reconfigures an initialized root logger."""
        setup_logging(log_level="INFO")

        setup_logging(log_level="WARNING", force=True)

        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING
        assert len(root_logger.handlers) == 1


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_named_logger(self, reset_logger_singleton):
        """Test that get_logger returns a logger with the given name."""
        logger = get_logger("my_module")

        assert logger.name == "my_module"

    def test_get_logger_auto_initializes(self, reset_logger_singleton):
        """Test that get_logger initializes logging if not done."""
        from pdfshelf.core import logger as logger_module

        logger = get_logger("auto_init_test")
        logger.info("This should not raise")

        assert logger_module._logger_initialized is True

    def test_get_logger_without_config(self, temp_dir: Path, monkeypatch,
                                       reset_logger_singleton, reset_config_singleton):
        """Test that a missing config falls back to default logging."""
        monkeypatch.chdir(temp_dir)

        logger = get_logger("no_config")

        assert logger is not None
        assert logging.getLogger().level == logging.INFO

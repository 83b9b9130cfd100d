"""Tests for logging setup."""

import logging

from httpprovider.logging_config import setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_and_propagation(self):
        """Test that the package logger is configured and isolated."""
        logger = setup_logging(level="DEBUG", force=True)
        assert logger.name == "httpprovider"
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        """Test that a file handler is added when requested."""
        log_file = tmp_path / "provider.log"
        logger = setup_logging(level="INFO", log_file=log_file, force=True)
        logging.getLogger("httpprovider.core.operation").info("fetched")
        for handler in logger.handlers:
            handler.flush()
        assert "fetched" in log_file.read_text()
        setup_logging(force=True)

    def test_not_reconfigured_without_force(self):
        """Test that existing handlers are kept unless forced."""
        logger = setup_logging(force=True)
        handlers = list(logger.handlers)
        setup_logging(level="ERROR")
        assert logger.handlers == handlers

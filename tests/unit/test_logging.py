"""
Portman: Tests for Logging Setup

Test suite for ``portman.core.logging``. Covers:
- Basic logger configuration
- File and console handlers
- Namespaced logger retrieval
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from portman.core.config import PortmanConfig
from portman.core.logging import get_logger, setup_logging


class TestLogging:
    """Tests for logging configuration and helpers."""

    def test_setup_logging_creates_log_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """setup_logging should create a log file and write messages to it."""

        log_file = tmp_path / "test.log"

        # Start from a clean root logger so setup_logging attaches
        # handlers for this test-specific file.
        root_logger = logging.getLogger()
        saved = list(root_logger.handlers)
        for handler in saved:
            root_logger.removeHandler(handler)

        try:
            monkeypatch.setenv("LOG_FILE", str(log_file))
            config = PortmanConfig()

            setup_logging(config)
            logger = get_logger("test.logging")
            logger.info("Test log message")

            for handler in root_logger.handlers:
                handler.flush()

            assert log_file.exists()
            assert "Test log message" in log_file.read_text()
        finally:
            for handler in list(root_logger.handlers):
                root_logger.removeHandler(handler)
                handler.close()
            for handler in saved:
                root_logger.addHandler(handler)

    def test_setup_logging_is_idempotent(self) -> None:
        setup_logging()
        count = len(logging.getLogger().handlers)
        setup_logging()
        assert len(logging.getLogger().handlers) == count

    def test_get_logger_returns_namespaced_logger(self) -> None:
        """get_logger should prefix loggers with the 'portman.' namespace."""

        assert get_logger("core.test").name == "portman.core.test"
        assert get_logger("portman.risk.allocation").name == "portman.risk.allocation"
        assert logging.getLogger().handlers

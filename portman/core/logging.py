"""
Portman: Logging Setup

This module provides centralised logging configuration and helper
functions for obtaining namespaced loggers.

Key responsibilities:
- Configure root logging handlers and formats
- Provide a helper to obtain module-specific loggers

External dependencies:
- logging: Python standard library logging framework

Thread safety: Thread-safe (logging module is process-global and
thread-safe under normal usage)

Author: Portman Team
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

import logging
import sys
from typing import Optional

from portman.core.config import PortmanConfig, get_config

# ============================================================================
# Public API
# ============================================================================


def setup_logging(config: Optional[PortmanConfig] = None) -> None:
    """Configure application-wide logging.

    This function initialises the root logger and the ``portman``
    namespace logger. It is idempotent: calling it multiple times will not
    attach duplicate handlers.

    Args:
        config: Optional configuration object. If omitted, the global
            configuration will be loaded via :func:`get_config`.
    """

    if config is None:
        config = get_config()

    root_logger = logging.getLogger()

    if root_logger.handlers:
        return

    logging_cfg = config.logging
    log_level = getattr(logging, logging_cfg.level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    file_handler = logging.FileHandler(logging_cfg.file)
    file_handler.setFormatter(formatter)

    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    logging.getLogger("portman").setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger for the given module.

    Args:
        name: Module-level ``__name__`` or any descriptive logger name.

    Returns:
        A :class:`logging.Logger` instance under the ``portman``
        namespace.
    """

    setup_logging()
    if name == "portman" or name.startswith("portman."):
        return logging.getLogger(name)
    return logging.getLogger(f"portman.{name}")

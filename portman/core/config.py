"""
Portman: Configuration Management

This module provides centralised configuration management for Portman.
It loads configuration from environment variables (optionally via a .env
file), with strongly typed access via Pydantic BaseSettings.

Key responsibilities:
- Load and validate configuration from environment variables
- Provide typed configuration for logging and portfolio comparison
- Expose a cached global configuration accessor for convenience

External dependencies:
- pydantic: Data validation and settings management
- pydantic-settings: Environment variable integration for settings
- python-dotenv: Optional .env loading for local development

Thread safety: Thread-safe (configuration is immutable after initial load)

Author: Portman Team
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# ============================================================================
# Data Models
# ============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration for Portman.

    Attributes:
        level: Log level name (e.g. "INFO", "DEBUG").
        file: Path to the primary log file.
    """

    level: str = "INFO"
    file: str = "portman.log"


class PortmanConfig(BaseSettings):
    """Main Portman configuration loaded from environment variables.

    Environment variables use the following mapping by default:

    - LOG_LEVEL / LOG_FILE for logging
    - ENVIRONMENT for environment name (development/staging/production)
    - COMPARISON_BAND_PCT for the on-target band used when comparing
      actual holdings against target allocations
    - RISK_SUM_TOLERANCE for the tolerance used when checking that an
      account's risk tiers add up to 100%
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: str = Field(default="portman.log", alias="LOG_FILE")

    # Environment
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Portfolio comparison / risk allocation
    comparison_band_pct: float = Field(default=2.0, alias="COMPARISON_BAND_PCT")
    risk_sum_tolerance: float = Field(default=0.01, alias="RISK_SUM_TOLERANCE")

    @property
    def logging(self) -> LoggingConfig:
        """Return logging configuration."""

        return LoggingConfig(level=self.log_level, file=self.log_file)


# ============================================================================
# Public API
# ============================================================================


def load_config(env_file: Optional[Path] = None) -> PortmanConfig:
    """Load Portman configuration.

    For local development this function will attempt to load a `.env` file
    from the project root if one is present. Environment variables always
    take precedence over values from `.env`.

    Args:
        env_file: Optional explicit path to a `.env` file. If omitted,
            the function will look for `.env` in the current working
            directory.

    Returns:
        A fully populated :class:`PortmanConfig` instance.

    Raises:
        FileNotFoundError: If an explicit ``env_file`` is provided but
            does not exist.
    """

    if env_file is not None:
        if not env_file.exists():
            msg = f"Environment file not found: {env_file}"
            raise FileNotFoundError(msg)
        # An explicit env_file wins over values already in the process
        # environment.
        load_dotenv(env_file, override=True)
    else:
        default_env = Path(".env")
        if default_env.exists():
            load_dotenv(default_env)

    return PortmanConfig()  # type: ignore[call-arg]


_global_config: Optional[PortmanConfig] = None


def get_config() -> PortmanConfig:
    """Return the global Portman configuration singleton.

    The configuration is loaded on first access and cached for
    subsequent calls.
    """

    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config

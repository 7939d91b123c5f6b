"""
Portman: Tests for Configuration Management

Test suite for ``portman.core.config``. Covers:
- Default configuration values
- Environment variable overrides
- .env loading behaviour
"""

from __future__ import annotations

from pathlib import Path

import pytest

from portman.core.config import PortmanConfig, get_config, load_config


class TestPortmanConfig:
    """Tests for the PortmanConfig settings model."""

    def test_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Default values should match sensible local-development defaults."""

        for name in ("LOG_LEVEL", "ENVIRONMENT", "COMPARISON_BAND_PCT", "RISK_SUM_TOLERANCE"):
            monkeypatch.delenv(name, raising=False)

        config = PortmanConfig()

        assert config.log_level.upper() == "INFO"
        assert config.environment == "development"
        assert config.comparison_band_pct == 2.0
        assert config.risk_sum_tolerance == 0.01

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables must override default values."""

        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("COMPARISON_BAND_PCT", "3.5")
        monkeypatch.setenv("ENVIRONMENT", "staging")

        config = PortmanConfig()

        assert config.log_level.upper() == "DEBUG"
        assert config.comparison_band_pct == 3.5
        assert config.environment == "staging"

    def test_logging_property_returns_loggingconfig(self) -> None:
        config = PortmanConfig()

        logging_cfg = config.logging
        assert logging_cfg.level == config.log_level
        assert logging_cfg.file == config.log_file


class TestLoadConfig:
    """Tests for the top-level load_config function."""

    def test_load_from_explicit_env_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An explicit env_file should be loaded when it exists."""

        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.delenv("RISK_SUM_TOLERANCE", raising=False)

        env_path = tmp_path / ".env.test"
        env_path.write_text("ENVIRONMENT=from_env_file\nRISK_SUM_TOLERANCE=0.5\n")

        config = load_config(env_file=env_path)

        assert config.environment == "from_env_file"
        assert config.risk_sum_tolerance == 0.5

        # load_dotenv writes into os.environ; drop the values again.
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.delenv("RISK_SUM_TOLERANCE", raising=False)

    def test_missing_explicit_env_file_raises(self, tmp_path: Path) -> None:
        """A missing explicit env file should raise FileNotFoundError."""

        missing = tmp_path / "does_not_exist.env"
        with pytest.raises(FileNotFoundError):
            load_config(env_file=missing)


class TestGetConfigSingleton:
    """Tests for the get_config singleton accessor."""

    def test_get_config_returns_singleton(self) -> None:
        """get_config should always return the same instance within a process."""

        config_1 = get_config()
        config_2 = get_config()

        assert config_1 is config_2
        assert isinstance(config_1.environment, str)

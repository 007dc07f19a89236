"""Unit tests for environment settings."""

import pytest

from calculagraph import settings as settings_module
from calculagraph.exceptions import ConfigError
from calculagraph.logger import TRACE  # noqa: F401  registers the TRACE level name
from calculagraph.settings import Settings, get_settings, load_settings


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self, monkeypatch) -> None:
        """Without environment variables timing is on at INFO."""
        monkeypatch.delenv("CALCULAGRAPH_ENABLED", raising=False)
        monkeypatch.delenv("CALCULAGRAPH_LOG_LEVEL", raising=False)

        assert load_settings() == Settings(enabled=True, log_level="INFO")

    @pytest.mark.parametrize("raw, expected", [("1", True), ("Yes", True), ("off", False), ("FALSE", False), ("", True)])
    def test_enabled_parsing(self, monkeypatch, raw: str, expected: bool) -> None:
        """Common boolean spellings are understood."""
        monkeypatch.setenv("CALCULAGRAPH_ENABLED", raw)

        assert load_settings().enabled is expected

    def test_enabled_invalid(self, monkeypatch) -> None:
        """An unknown boolean raises ConfigError."""
        monkeypatch.setenv("CALCULAGRAPH_ENABLED", "maybe")

        with pytest.raises(ConfigError, match="CALCULAGRAPH_ENABLED"):
            load_settings()

    @pytest.mark.parametrize("raw, expected", [("debug", "DEBUG"), ("trace", "TRACE"), (" warning ", "WARNING")])
    def test_log_level(self, monkeypatch, raw: str, expected: str) -> None:
        """Level names are normalised to upper case."""
        monkeypatch.setenv("CALCULAGRAPH_LOG_LEVEL", raw)

        assert load_settings().log_level == expected

    def test_log_level_invalid(self, monkeypatch) -> None:
        """An unknown level raises ConfigError."""
        monkeypatch.setenv("CALCULAGRAPH_LOG_LEVEL", "loud")

        with pytest.raises(ConfigError, match="logging level"):
            load_settings()


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_loaded_once(self, monkeypatch) -> None:
        """The .env file is read once until the cache is cleared."""
        calls = []
        monkeypatch.setattr(settings_module, "load_dotenv", lambda: calls.append(1))

        first = get_settings()
        second = get_settings()

        assert first is second
        assert len(calls) == 1

    def test_cache_clear_reloads(self, monkeypatch) -> None:
        """Clearing the cache picks up new environment values."""
        monkeypatch.setenv("CALCULAGRAPH_ENABLED", "true")
        assert get_settings().enabled is True

        monkeypatch.setenv("CALCULAGRAPH_ENABLED", "false")
        assert get_settings().enabled is True

        get_settings.cache_clear()
        assert get_settings().enabled is False


class TestConfigError:
    """Tests for the configuration error type."""

    def test_describes_environment_values(self) -> None:
        """ConfigError documents itself in terms of CALCULAGRAPH_* variables."""
        assert "CALCULAGRAPH_" in ConfigError.__doc__

    def test_message_names_the_variable(self, monkeypatch) -> None:
        """The raised message names the offending variable and its value."""
        monkeypatch.setenv("CALCULAGRAPH_ENABLED", "maybe")

        with pytest.raises(ConfigError, match="CALCULAGRAPH_ENABLED.*'maybe'"):
            load_settings()

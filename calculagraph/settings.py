from __future__ import annotations
from functools import lru_cache
from pydantic import BaseModel
from dotenv import load_dotenv
import logging
import os

from calculagraph.exceptions import ConfigError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class Settings(BaseModel):
    enabled: bool = True
    log_level: str = "INFO"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _env_level(name: str, default: str) -> str:
    level = os.getenv(name, default).strip().upper()
    # Custom levels (TRACE) are registered by calculagraph.logger on import.
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"{name} is not a logging level: {level!r}")
    return level


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        enabled=_env_bool("CALCULAGRAPH_ENABLED", Settings().enabled),
        log_level=_env_level("CALCULAGRAPH_LOG_LEVEL", Settings().log_level),
    )


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Settings loaded once per process; `get_settings.cache_clear()` reloads."""
    return load_settings()


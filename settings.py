from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_BASE_URL_ENV = "SENSOR_SOURCE_BASE_URL"
_TIMEOUT_ENV = "SENSOR_REQUEST_TIMEOUT"
_USER_AGENT_ENV = "SENSOR_USER_AGENT"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_BASE_URL = "http://lpo.dt.navy.mil"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "fetch_data/0.1.0"


@dataclass(frozen=True)
class Settings:
    source_base_url: str
    request_timeout: float
    user_agent: str
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_timeout(default: float) -> float:
    value = os.getenv(_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        source_base_url=_read_str_env(_BASE_URL_ENV, DEFAULT_BASE_URL),
        request_timeout=_read_timeout(DEFAULT_TIMEOUT),
        user_agent=_read_str_env(_USER_AGENT_ENV, DEFAULT_USER_AGENT),
        log_level=_read_log_level("WARNING"),
    )

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from settings import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, get_settings


@dataclass(frozen=True)
class CLIConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


def load_config(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> CLIConfig:
    settings = get_settings()
    url = base_url or settings.source_base_url
    if timeout is None or timeout <= 0:
        timeout = settings.request_timeout
    return CLIConfig(
        base_url=url.rstrip("/"),
        timeout=timeout,
        user_agent=settings.user_agent,
    )

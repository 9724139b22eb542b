from __future__ import annotations

import logging
from typing import Optional

import httpx

from cli.config import CLIConfig
from services.errors import TransportError
from services.fetcher import ERROR_PAGE_MARKER

logger = logging.getLogger(__name__)


class SensorClient:
    """Minimal HTTP client for the sensor data tables."""

    def __init__(
        self,
        config: CLIConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._client = httpx.Client(
            timeout=config.timeout,
            follow_redirects=True,
            headers={"User-Agent": config.user_agent},
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SensorClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_table(self, url: str) -> str:
        """Return the body of one table.

        Error responses carrying the source's error page are passed through so
        the caller can report a missing date rather than a transport failure.
        """
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            raise TransportError(url, str(exc) or exc.__class__.__name__) from exc

        body = response.text
        if response.is_error and ERROR_PAGE_MARKER not in body:
            logger.error(
                "Source responded with an error status",
                extra={"url": url, "status": response.status_code},
            )
            raise TransportError(url, f"HTTP {response.status_code}")
        return body

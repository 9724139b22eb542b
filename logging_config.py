from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Iterable

from settings import get_settings

# Keys passed through ``extra=`` by the fetch and crunch services.
CONTEXT_KEYS = (
    "date_key",
    "series",
    "url",
    "status",
    "byte_count",
    "line_count",
    "row_number",
    "reason",
)

_configured = False


class ContextualFormatter(logging.Formatter):
    """Append ``key=value`` pairs for the known context keys of a record."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        context_keys: Iterable[str] = CONTEXT_KEYS,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.context_keys = tuple(context_keys)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = " ".join(
            f"{key}={getattr(record, key)}"
            for key in self.context_keys
            if getattr(record, key, None) is not None
        )
        return f"{message} | {context}" if context else message


def configure_logging(level: str | int | None = None) -> None:
    """Send log records to standard error; standard output carries data."""
    global _configured
    if _configured:
        return

    log_level = level if level is not None else get_settings().log_level
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "contextual": {
                    "()": "logging_config.ContextualFormatter",
                    "fmt": "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
                    "datefmt": "%H:%M:%S",
                }
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "contextual",
                    "stream": "ext://sys.stderr",
                }
            },
            "root": {"handlers": ["stderr"], "level": log_level},
        }
    )
    _configured = True

"""Exceptions raised by the fetch and aggregation services."""

from __future__ import annotations


class SensorDataError(Exception):
    """Base class for every failure the command-line tools report."""


class InvalidDateError(SensorDataError, ValueError):
    """The requested date is not an 8-digit ``YYYYMMDD`` calendar date."""


class TransportError(SensorDataError):
    """A request to a data source failed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Request to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class DateNotFoundError(SensorDataError):
    """The data source answered with its error page for the requested date."""


class MisalignedSourceError(SensorDataError):
    """The three source tables cannot be merged line by line."""


class RecordFormatError(SensorDataError, ValueError):
    """An input line does not follow the interchange format."""

    def __init__(self, row_number: int, reason: str) -> None:
        super().__init__(f"line {row_number}: {reason}")
        self.row_number = row_number
        self.reason = reason


class NoDataError(SensorDataError):
    """There were no records to summarize."""

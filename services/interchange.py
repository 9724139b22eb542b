"""Parsing of the five-field interchange format.

A line looks like ``2015_02_03 09:02:34 38.86 30.07 3.0``: date, time, air
temperature, barometric pressure and wind speed separated by single spaces.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Iterable, Iterator

from models.records import Record
from services.errors import RecordFormatError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y_%m_%d"
TIME_FORMAT = "%H:%M:%S"
FIELD_COUNT = 5


def parse_value(raw: str) -> float:
    """Parse one sensor value; NaN and infinities are not measurements."""

    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"non-finite value {raw!r}")
    return value


def parse_timestamp(date_raw: str, time_raw: str) -> datetime:
    return datetime.strptime(f"{date_raw} {time_raw}", f"{DATE_FORMAT} {TIME_FORMAT}")


def parse_record(line: str, row_number: int = 1) -> Record:
    fields = line.split()
    if len(fields) != FIELD_COUNT:
        raise RecordFormatError(
            row_number, f"expected {FIELD_COUNT} fields, found {len(fields)}"
        )

    date_raw, time_raw, *value_fields = fields
    try:
        timestamp = parse_timestamp(date_raw, time_raw)
    except ValueError as exc:
        raise RecordFormatError(row_number, "invalid date or time") from exc

    try:
        temperature, pressure, wind_speed = (
            parse_value(value) for value in value_fields
        )
    except ValueError as exc:
        raise RecordFormatError(row_number, "invalid numeric value") from exc

    return Record(
        date=timestamp.date(),
        time=timestamp.time(),
        temperature=temperature,
        pressure=pressure,
        wind_speed=wind_speed,
    )


def read_records(lines: Iterable[str]) -> Iterator[Record]:
    """Parse records from an iterable of lines, skipping blank ones."""

    for row_number, line in enumerate(lines, start=1):
        if not line.strip():
            logger.debug("Skipping blank line", extra={"row_number": row_number})
            continue
        yield parse_record(line, row_number)

"""Retrieval and merging of the three daily sensor tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Protocol

from services.errors import (
    DateNotFoundError,
    InvalidDateError,
    MisalignedSourceError,
)
from services.interchange import parse_timestamp, parse_value

logger = logging.getLogger(__name__)

ERROR_PAGE_MARKER = "error.html"
VALUE_OFFSET = 19

# Order matters: the temperature table is fetched first and checked for the
# error page before the others are requested.
SERIES_PATHS: Dict[str, str] = {
    "air_temperature": "Air_Temp",
    "barometric_pressure": "Barometric_Press",
    "wind_speed": "Wind_Speed",
}


class TableSource(Protocol):
    def fetch_table(self, url: str) -> str: ...


@dataclass(frozen=True)
class SourceTables:
    """Raw bodies of the three tables for one date."""

    air_temperature: str
    barometric_pressure: str
    wind_speed: str


def parse_target_date(raw: Optional[str], today: Optional[date] = None) -> date:
    """Resolve the ``YYYYMMDD`` argument, defaulting to today's date."""

    if raw is None:
        return today or date.today()
    if len(raw) != 8 or not (raw.isascii() and raw.isdigit()):
        raise InvalidDateError(f"Improper date format {raw!r}: use YYYYMMDD")
    try:
        return date(int(raw[:4]), int(raw[4:6]), int(raw[6:]))
    except ValueError as exc:
        raise InvalidDateError(f"{raw!r} is not a calendar date") from exc


def format_date_key(target: date) -> str:
    return f"{target.year:04d}_{target.month:02d}_{target.day:02d}"


def build_addresses(base_url: str, target: date) -> Dict[str, str]:
    year = f"{target.year:04d}"
    day = format_date_key(target)
    root = base_url.rstrip("/")
    return {
        series: f"{root}/data/DM/{year}/{day}/{name}"
        for series, name in SERIES_PATHS.items()
    }


def collect_tables(client: TableSource, addresses: Dict[str, str]) -> SourceTables:
    """Fetch all three tables, stopping early if the date is unavailable."""

    bodies: Dict[str, str] = {}
    for series in SERIES_PATHS:
        url = addresses[series]
        body = client.fetch_table(url)
        logger.info(
            "Fetched series table",
            extra={"series": series, "url": url, "byte_count": len(body)},
        )
        if not bodies and ERROR_PAGE_MARKER in body:
            raise DateNotFoundError(
                "Web page error reported; confirm the date has data."
            )
        bodies[series] = body
    return SourceTables(**bodies)


def _split_table(body: str) -> List[str]:
    lines = body.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def _value_token(line: str, series: str, row_number: int) -> str:
    raw = line[VALUE_OFFSET:].strip()
    if not raw:
        raise MisalignedSourceError(
            f"{series} line {row_number} has no value after the timestamp"
        )
    try:
        parse_value(raw)
    except ValueError as exc:
        raise MisalignedSourceError(
            f"{series} line {row_number} has an invalid value {raw!r}"
        ) from exc
    return raw


def merge_tables(tables: SourceTables) -> List[str]:
    """Combine corresponding lines of the three tables into interchange rows.

    The temperature line is kept as received; pressure and wind contribute
    only their value text.
    """

    temperature_lines = _split_table(tables.air_temperature)
    pressure_lines = _split_table(tables.barometric_pressure)
    wind_lines = _split_table(tables.wind_speed)

    counts = {
        "air_temperature": len(temperature_lines),
        "barometric_pressure": len(pressure_lines),
        "wind_speed": len(wind_lines),
    }
    if len(set(counts.values())) != 1:
        detail = ", ".join(f"{series}={count}" for series, count in counts.items())
        raise MisalignedSourceError(f"Source tables differ in line count: {detail}")

    rows: List[str] = []
    for row_number, (temperature_line, pressure_line, wind_line) in enumerate(
        zip(temperature_lines, pressure_lines, wind_lines), start=1
    ):
        prefix = temperature_line[:VALUE_OFFSET]
        try:
            parse_timestamp(*prefix.split())
        except (TypeError, ValueError) as exc:
            raise MisalignedSourceError(
                f"air_temperature line {row_number} has no valid timestamp"
            ) from exc

        if pressure_line[:VALUE_OFFSET] != prefix or wind_line[:VALUE_OFFSET] != prefix:
            logger.warning(
                "Source timestamps disagree",
                extra={"row_number": row_number, "reason": "timestamp mismatch"},
            )

        _value_token(temperature_line, "air_temperature", row_number)
        rows.append(
            " ".join(
                (
                    temperature_line.rstrip(),
                    _value_token(pressure_line, "barometric_pressure", row_number),
                    _value_token(wind_line, "wind_speed", row_number),
                )
            )
        )

    logger.info("Merged source tables", extra={"line_count": len(rows)})
    return rows


def fetch_rows(client: TableSource, base_url: str, target: date) -> List[str]:
    addresses = build_addresses(base_url, target)
    logger.info("Fetching sensor tables", extra={"date_key": format_date_key(target)})
    return merge_tables(collect_tables(client, addresses))

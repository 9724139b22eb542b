from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List

import pytest

from services.errors import DateNotFoundError, InvalidDateError, MisalignedSourceError
from services.fetcher import (
    SourceTables,
    build_addresses,
    collect_tables,
    fetch_rows,
    format_date_key,
    merge_tables,
    parse_target_date,
)

BASE_URL = "http://lpo.dt.navy.mil"

TEMPERATURE = "2015_02_03 09:02:00 38.86\r\n2015_02_03 09:03:00 39.10\r\n"
PRESSURE = "2015_02_03 09:02:00 30.07\r\n2015_02_03 09:03:00 30.05\r\n"
WIND = "2015_02_03 09:02:00  3.00\r\n2015_02_03 09:03:00 12.40\r\n"


class StubSource:
    def __init__(self, bodies: Dict[str, str]) -> None:
        self.bodies = bodies
        self.requested: List[str] = []

    def fetch_table(self, url: str) -> str:
        self.requested.append(url)
        return self.bodies[url.rsplit("/", 1)[-1]]


def _stub(temperature: str = TEMPERATURE, pressure: str = PRESSURE, wind: str = WIND) -> StubSource:
    return StubSource(
        {"Air_Temp": temperature, "Barometric_Press": pressure, "Wind_Speed": wind}
    )


def test_parse_target_date_explicit() -> None:
    target = parse_target_date("20150203")

    assert target == date(2015, 2, 3)
    assert format_date_key(target) == "2015_02_03"


def test_parse_target_date_defaults_to_today() -> None:
    assert parse_target_date(None, today=date(2024, 7, 9)) == date(2024, 7, 9)


@pytest.mark.parametrize("raw", ["2015023", "201502034", "2015-02-03", "2015O203", "２０１５０２０３", ""])
def test_parse_target_date_rejects_bad_format(raw: str) -> None:
    with pytest.raises(InvalidDateError):
        parse_target_date(raw)


def test_parse_target_date_rejects_impossible_date() -> None:
    with pytest.raises(InvalidDateError, match="not a calendar date"):
        parse_target_date("20150230")


def test_build_addresses_uses_year_and_date_components() -> None:
    addresses = build_addresses(BASE_URL + "/", date(2014, 1, 1))

    assert addresses == {
        "air_temperature": "http://lpo.dt.navy.mil/data/DM/2014/2014_01_01/Air_Temp",
        "barometric_pressure": "http://lpo.dt.navy.mil/data/DM/2014/2014_01_01/Barometric_Press",
        "wind_speed": "http://lpo.dt.navy.mil/data/DM/2014/2014_01_01/Wind_Speed",
    }


def test_collect_tables_fetches_temperature_first() -> None:
    source = _stub()

    tables = collect_tables(source, build_addresses(BASE_URL, date(2015, 2, 3)))

    assert tables == SourceTables(TEMPERATURE, PRESSURE, WIND)
    assert [url.rsplit("/", 1)[-1] for url in source.requested] == [
        "Air_Temp",
        "Barometric_Press",
        "Wind_Speed",
    ]


def test_collect_tables_stops_on_error_page() -> None:
    source = _stub(temperature='<html><a href="/error.html">moved</a></html>')

    with pytest.raises(DateNotFoundError):
        collect_tables(source, build_addresses(BASE_URL, date(2099, 1, 1)))

    assert len(source.requested) == 1


def test_merge_tables_keeps_source_value_text() -> None:
    rows = merge_tables(SourceTables(TEMPERATURE, PRESSURE, WIND))

    assert rows == [
        "2015_02_03 09:02:00 38.86 30.07 3.00",
        "2015_02_03 09:03:00 39.10 30.05 12.40",
    ]


def test_merge_tables_does_not_renormalize_trailing_zeros() -> None:
    rows = merge_tables(
        SourceTables(
            "2015_02_03 09:02:00 38.860\r\n",
            "2015_02_03 09:02:00 30.070\r\n",
            "2015_02_03 09:02:00   3.00\r\n",
        )
    )

    assert rows == ["2015_02_03 09:02:00 38.860 30.070 3.00"]


@pytest.mark.parametrize("value", ["nan", "inf", "-inf"])
def test_merge_tables_rejects_non_finite_source_values(value: str) -> None:
    wind = WIND.replace(" 3.00", f" {value}")

    with pytest.raises(MisalignedSourceError, match="wind_speed line 1 has an invalid value"):
        merge_tables(SourceTables(TEMPERATURE, PRESSURE, wind))


def test_merge_tables_accepts_bare_newlines_and_trailing_blank_lines() -> None:
    rows = merge_tables(
        SourceTables(
            TEMPERATURE.replace("\r\n", "\n") + "\n\n",
            PRESSURE,
            WIND + "\r\n",
        )
    )

    assert len(rows) == 2


def test_merge_tables_rejects_unequal_line_counts() -> None:
    short_wind = WIND.split("\r\n")[0] + "\r\n"

    with pytest.raises(MisalignedSourceError, match="wind_speed=1"):
        merge_tables(SourceTables(TEMPERATURE, PRESSURE, short_wind))


def test_merge_tables_rejects_line_without_value() -> None:
    truncated = "2015_02_03 09:02:00\r\n2015_02_03 09:03:00 30.05\r\n"

    with pytest.raises(MisalignedSourceError, match="barometric_pressure line 1"):
        merge_tables(SourceTables(TEMPERATURE, truncated, WIND))


def test_merge_tables_rejects_missing_timestamp() -> None:
    broken = "garbage\r\n2015_02_03 09:03:00 39.10\r\n"

    with pytest.raises(MisalignedSourceError, match="no valid timestamp"):
        merge_tables(SourceTables(broken, PRESSURE, WIND))


def test_merge_tables_warns_on_timestamp_mismatch(caplog) -> None:
    shifted = PRESSURE.replace("09:03:00", "09:03:01")

    with caplog.at_level(logging.WARNING, logger="services.fetcher"):
        rows = merge_tables(SourceTables(TEMPERATURE, shifted, WIND))

    assert len(rows) == 2
    assert any(
        getattr(entry, "row_number", None) == 2 for entry in caplog.records
    )


def test_fetch_rows_end_to_end_with_stub() -> None:
    source = _stub()

    rows = fetch_rows(source, BASE_URL, date(2015, 2, 3))

    assert len(rows) == 2
    assert all("/2015/2015_02_03/" in url for url in source.requested)

from __future__ import annotations

import json
from typing import Iterable, List

from models.schemas import DailySummary, SeriesStatistics
from services.aggregator import AggregationSummary, SeriesSummary

_SECTIONS = (
    ("Air Temperature", "air_temperature"),
    ("Barometric Pressure", "barometric_pressure"),
    ("Wind Speed", "wind_speed"),
)


def _format_value(value: float | None) -> str:
    return "no data" if value is None else f"{value:f}"


def _series_lines(title: str, series: SeriesSummary) -> Iterable[str]:
    yield f"\t{title}"
    yield f"\t\tMean\t{_format_value(series.mean)}"
    yield f"\t\tMedian\t{_format_value(series.median)}"


def render_text(summary: AggregationSummary) -> str:
    lines: List[str] = [summary.date_key or ""]
    for title, attribute in _SECTIONS:
        lines.extend(_series_lines(title, getattr(summary, attribute)))
    return "\n".join(lines)


def to_schema(summary: AggregationSummary) -> DailySummary:
    return DailySummary(
        **{
            attribute: SeriesStatistics(
                mean=getattr(summary, attribute).mean,
                median=getattr(summary, attribute).median,
            )
            for _, attribute in _SECTIONS
        }
    )


def render_json(summary: AggregationSummary) -> str:
    payload = to_schema(summary).keyed_by(summary.date_key or "")
    return json.dumps(payload, indent=2)

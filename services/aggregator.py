"""Aggregation logic for sensor records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from models.records import Record


def mean(values: Sequence[float]) -> Optional[float]:
    """Arithmetic mean, or ``None`` when there is no data."""

    if not values:
        return None
    return sum(values) / len(values)


def median(values: Sequence[float]) -> Optional[float]:
    """Middle value of the sorted series, or ``None`` when there is no data.

    Even-length series average the two values around the midpoint.
    """

    count = len(values)
    if not count:
        return None
    ordered = sorted(values)
    middle = count // 2
    if count % 2:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2


@dataclass
class SeriesSummary:
    """Summary statistics for a single measured quantity."""

    mean: Optional[float] = None
    median: Optional[float] = None

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "SeriesSummary":
        return cls(mean=mean(values), median=median(values))


@dataclass
class AggregationSummary:
    """Computed statistics for one run of records."""

    date_key: Optional[str] = None
    row_count: int = 0
    air_temperature: SeriesSummary = field(default_factory=SeriesSummary)
    barometric_pressure: SeriesSummary = field(default_factory=SeriesSummary)
    wind_speed: SeriesSummary = field(default_factory=SeriesSummary)


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def aggregate(self, records: Iterable[Record]) -> AggregationSummary:
        summary = AggregationSummary()
        temperatures: List[float] = []
        pressures: List[float] = []
        wind_speeds: List[float] = []

        for record in records:
            if summary.date_key is None:
                summary.date_key = record.date_key
            temperatures.append(record.temperature)
            pressures.append(record.pressure)
            wind_speeds.append(record.wind_speed)
            summary.row_count += 1

        summary.air_temperature = SeriesSummary.from_values(temperatures)
        summary.barometric_pressure = SeriesSummary.from_values(pressures)
        summary.wind_speed = SeriesSummary.from_values(wind_speeds)
        return summary

"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
import datetime


@dataclass(frozen=True, slots=True)
class Record:
    """One aligned sample: a timestamp and the three sensor values."""

    date: datetime.date
    time: datetime.time
    temperature: float
    pressure: float
    wind_speed: float

    @property
    def date_key(self) -> str:
        """ISO label used to key aggregated output."""

        return self.date.isoformat()

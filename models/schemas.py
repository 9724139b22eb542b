"""Pydantic schemas for the JSON summary emitted by ``crunch_data``."""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class SeriesStatistics(BaseModel):
    """Mean and median of one measured quantity."""

    mean: Optional[float] = None
    median: Optional[float] = None


class DailySummary(BaseModel):
    """Statistics for the three quantities of one day."""

    model_config = ConfigDict(populate_by_name=True)

    air_temperature: SeriesStatistics = Field(..., alias="airTemperature")
    barometric_pressure: SeriesStatistics = Field(..., alias="barometricPressure")
    wind_speed: SeriesStatistics = Field(..., alias="windSpeed")

    def keyed_by(self, date_key: str) -> Dict[str, dict]:
        return {date_key: self.model_dump(mode="json", by_alias=True)}

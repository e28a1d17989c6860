from __future__ import annotations
from typing import TypedDict, Literal, List, Optional, Protocol
from dataclasses import dataclass
from datetime import date

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

ReadingKind = Literal["load_curve", "daily"]


# Raw API payloads
class IntervalReading(BaseModel):
    """One raw sample as returned by the metering API or read from CSV.

    Attributes:
        date: Source timestamp, e.g. '2024-01-01 10:30:00' or '2024-01-01'
        value: Reading, kept as the source sent it (usually a string)
        interval_length: Duration token such as 'PT30M'; load curves only
    """

    model_config = ConfigDict(frozen=True)

    date: str
    value: str | float
    interval_length: Optional[str] = None


class ReadingType(BaseModel):
    model_config = ConfigDict(frozen=True)

    unit: str = "W"
    measurement_kind: str = "power"
    aggregate: str = "average"


class MeterReading(BaseModel):
    """A whole response for one window: metadata plus its samples."""

    model_config = ConfigDict(frozen=True)

    usage_point_id: str = ""
    start: str = ""
    end: str = ""
    quality: str = "BRUT"
    reading_type: ReadingType = Field(default_factory=ReadingType)
    interval_reading: List[IntervalReading] = Field(default_factory=list)


class MeteringSource(Protocol):
    """Remote metering API. Dates are 'YYYY-MM-DD'; any exception means the
    window is unavailable."""

    async def fetch_load_curve(self, start: str, end: str) -> MeterReading: ...

    async def fetch_daily_aggregate(self, start: str, end: str) -> MeterReading: ...


# Frames
class PointFrame(pd.DataFrame):
    """
    Normalised points for one window.

    Expected:
      - DatetimeIndex named 'start', tz-aware
      - Columns: ['value']
    """

    @property
    def _constructor(self):
        return PointFrame

    @property
    def value(self) -> pd.Series:
        return self["value"]


class CumulativeFrame(pd.DataFrame):
    """
    Final cumulative series.

    Expected:
      - DatetimeIndex named 'start', tz-aware
      - Columns: ['state', 'sum'] with sum[i] = state[i] + sum[i-1]
    """

    @property
    def _constructor(self):
        return CumulativeFrame

    @property
    def state(self) -> pd.Series:
        return self["state"]

    # 'sum' would shadow DataFrame.sum
    @property
    def running_sum(self) -> pd.Series:
        return self["sum"]


# Records
class NormalizedPoint(TypedDict):
    timestamp: str  # ISO-8601 with offset
    value: float


class CumulativePoint(TypedDict):
    start: str  # ISO-8601 with offset
    state: float
    sum: float


## Backfill
@dataclass(frozen=True)
class Window:
    start: date
    end: date
    terminal: bool = False  # start was clamped to the floor date

    @property
    def days(self) -> int:
        return (self.end - self.start).days

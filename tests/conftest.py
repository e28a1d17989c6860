from datetime import date, timedelta

import pytest

from energyseries.types import IntervalReading, MeterReading, ReadingType

TZ = "Europe/Paris"
TODAY = date(2024, 6, 15)


class FauxSource:
    """In-memory metering API recording every window it is asked for."""

    def __init__(
        self, *, fail_load_curve=False, daily_successes=None, load_curve_hint="PT60M", garbled_daily_call=None
    ):
        self.fail_load_curve = fail_load_curve
        self.daily_successes = daily_successes  # None: never fails
        self.load_curve_hint = load_curve_hint
        self.garbled_daily_call = garbled_daily_call  # 1-based daily call answered with 'n/a'
        self.calls = []

    async def fetch_load_curve(self, start, end):
        self.calls.append(("load_curve", start, end))
        if self.fail_load_curve:
            raise RuntimeError("load curve unavailable")
        return MeterReading(
            start=start,
            end=end,
            reading_type=ReadingType(unit="W"),
            interval_reading=[
                IntervalReading(date=f"{start} 01:00:00", value="500", interval_length=self.load_curve_hint),
                IntervalReading(date=f"{start} 02:00:00", value="700", interval_length="PT60M"),
            ],
        )

    async def fetch_daily_aggregate(self, start, end):
        self.calls.append(("daily", start, end))
        done = sum(1 for kind, _, _ in self.calls if kind == "daily") - 1
        if self.daily_successes is not None and done >= self.daily_successes:
            raise RuntimeError("history not available")
        value = "n/a" if done + 1 == self.garbled_daily_call else "10000"
        return MeterReading(
            start=start,
            end=end,
            reading_type=ReadingType(unit="Wh", measurement_kind="energy", aggregate="sum"),
            interval_reading=[IntervalReading(date=start, value=value)],
        )


@pytest.fixture
def faux_source():
    return FauxSource()


@pytest.fixture
def half_hour_samples():
    # 10:00-11:00 and 11:00-12:00 at 30-min cadence, stamped at interval end
    return [
        IntervalReading(date="2024-01-01 10:30:00", value="100", interval_length="PT30M"),
        IntervalReading(date="2024-01-01 11:00:00", value="300", interval_length="PT30M"),
        IntervalReading(date="2024-01-01 11:30:00", value="400", interval_length="PT30M"),
        IntervalReading(date="2024-01-01 12:00:00", value="600", interval_length="PT30M"),
    ]


@pytest.fixture
def daily_samples():
    return [
        IntervalReading(date="2024-01-01", value="12000"),
        IntervalReading(date="2024-01-02", value="13500"),
        IntervalReading(date="2024-01-03", value="9000"),
    ]


def days_before(n):
    return (TODAY - timedelta(days=n)).isoformat()

"""Unit tests for timestamp localisation and interval hint parsing helpers."""

from datetime import date, datetime

import pandas as pd
import pytest
import pytz

from energyseries import exceptions, utils

TZ = "Europe/Paris"


def _tz():
    return pytz.timezone(TZ)


@pytest.mark.parametrize(
    "hint, minutes",
    [("PT30M", 30), ("PT10M", 10), ("PT60M", 60), ("PT1H", 60), ("pt15m", 15), ("30", 30)],
)
def test_parse_interval_minutes(hint, minutes):
    assert utils.parse_interval_minutes(hint) == minutes


@pytest.mark.parametrize("hint", [None, "", "   ", "PT", "PT0M", "P1D", "30 minutes"])
def test_parse_interval_minutes_has_no_default(hint):
    with pytest.raises(exceptions.IntervalHintError):
        utils.parse_interval_minutes(hint)


def test_naive_timestamp_is_wall_clock_in_tz():
    ts = utils.to_local_timestamp("2024-01-01 10:30:00", TZ)
    assert ts == _tz().localize(datetime(2024, 1, 1, 10, 30))
    assert ts.utcoffset().total_seconds() == 3600


def test_offset_timestamp_is_converted():
    ts = utils.to_local_timestamp("2024-01-01T09:30:00+00:00", TZ)
    assert ts.hour == 10 and ts.minute == 30


def test_unparseable_timestamp_raises():
    with pytest.raises(exceptions.NormalizeError):
        utils.to_local_timestamp("not a date", TZ)


def test_spring_gap_shifts_forward():
    # 2024-03-31 02:30 does not exist in Paris
    ts = utils.to_local_timestamp("2024-03-31 02:30:00", TZ)
    assert ts.hour == 3 and ts.minute == 0


def test_floor_to_hour_keeps_autumn_hours_apart():
    idx = pd.to_datetime(
        ["2024-10-27T02:30:00+02:00", "2024-10-27T02:30:00+01:00"], utc=True
    ).tz_convert(TZ)
    out = utils.floor_to_hour(idx, TZ)
    assert out.nunique() == 2
    assert list(out.minute) == [0, 0]


def test_coerce_values_mixed_types():
    assert list(utils.coerce_values(["1.5", 2, "3"])) == [1.5, 2.0, 3.0]


def test_empty_frames_are_tz_aware():
    assert str(utils.empty_point_frame(TZ).index.tz) == TZ
    assert list(utils.empty_cumulative_frame(TZ).columns) == ["state", "sum"]


def test_format_api_date():
    assert utils.format_api_date(date(2024, 6, 8)) == "2024-06-08"


@pytest.mark.parametrize("raw", [["nan"], ["1", "NaN"], ["inf"], [float("nan")]])
def test_coerce_values_rejects_non_finite(raw):
    with pytest.raises(exceptions.NormalizeError):
        utils.coerce_values(raw)

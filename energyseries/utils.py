from __future__ import annotations
import re
from datetime import date
from typing import Iterable, Optional, cast
from zoneinfo import ZoneInfo

import numpy as np
import pandas as pd

from . import canon, exceptions
from .types import CumulativeFrame, PointFrame

# 'PT30M', 'PT1H', '30M', '30'
_HINT_RE = re.compile(r"^(?:P?T)?(\d+)([MH]?)$", re.IGNORECASE)


def to_local_timestamp(raw: str, tz: str) -> pd.Timestamp:
    """
    Parse a source timestamp into `tz`.

    Naive strings are wall-clock time in `tz`; on the repeated autumn hour the
    standard-time reading is used and spring-gap times shift forward.
    Strings with an offset are converted.
    """
    try:
        ts = pd.Timestamp(raw)
    except (TypeError, ValueError) as e:
        raise exceptions.NormalizeError(f"Unparseable timestamp {raw!r}") from e
    if ts is pd.NaT:
        raise exceptions.NormalizeError(f"Unparseable timestamp {raw!r}")
    if ts.tz is None:
        return ts.tz_localize(ZoneInfo(tz), ambiguous=False, nonexistent="shift_forward")
    return ts.tz_convert(ZoneInfo(tz))


def localize_index(dates: Iterable[str], tz: str) -> pd.DatetimeIndex:
    stamps = [to_local_timestamp(d, tz) for d in dates]
    if not stamps:
        return pd.DatetimeIndex([], tz=ZoneInfo(tz), name=canon.INDEX_NAME)
    return pd.DatetimeIndex(stamps, name=canon.INDEX_NAME).tz_convert(ZoneInfo(tz))


def floor_to_hour(idx: pd.DatetimeIndex, tz: str) -> pd.DatetimeIndex:
    """Truncate to the top of the hour.

    Done in UTC so the repeated autumn hour keeps its own offset.
    Assumes `tz` uses whole-hour UTC offsets.
    """
    out = idx.tz_convert("UTC").floor("h").tz_convert(ZoneInfo(tz))
    out.name = canon.INDEX_NAME
    return out


def parse_interval_minutes(hint: Optional[str]) -> int:
    """Interval length in minutes from a duration token such as 'PT30M'.

    There is no default: a missing or malformed hint raises IntervalHintError.
    """
    if hint is None or not str(hint).strip():
        raise exceptions.IntervalHintError("Missing interval length hint")
    m = _HINT_RE.match(str(hint).strip())
    if m is None:
        raise exceptions.IntervalHintError(f"Malformed interval length hint {hint!r}")
    minutes = int(m.group(1)) * (60 if m.group(2).upper() == "H" else 1)
    exceptions.require(
        minutes > 0,
        f"Interval length hint {hint!r} must be positive",
        exceptions.IntervalHintError,
    )
    return minutes


def coerce_values(values: Iterable[str | float]) -> np.ndarray:
    """Readings as floats; non-numeric, NaN or infinite values are an error."""
    raw = list(values)
    try:
        out = pd.to_numeric(pd.Series(raw, dtype=object), errors="raise")
    except (TypeError, ValueError) as e:
        raise exceptions.NormalizeError(f"Non-numeric reading in {raw!r}") from e
    arr = np.asarray(out, dtype=float)
    exceptions.require(
        bool(np.isfinite(arr).all()),
        f"Non-finite reading in {raw!r}",
        exceptions.NormalizeError,
    )
    return arr


def unit_factor(unit: str) -> float:
    factor = canon.UNIT_FACTORS.get(unit)
    if factor is None:
        raise exceptions.UnitError(
            f"Unsupported load curve unit {unit!r}. Expected one of: "
            f"{', '.join(canon.UNIT_FACTORS)}"
        )
    return factor


def build_point_frame(idx: pd.DatetimeIndex, values: np.ndarray | pd.Series) -> PointFrame:
    df = pd.DataFrame({"value": np.asarray(values, dtype=float)}, index=idx)
    df.index.name = canon.INDEX_NAME
    df.__class__ = PointFrame
    return cast(PointFrame, df)


def empty_point_frame(tz: str = canon.DEFAULT_TZ) -> PointFrame:
    idx = pd.DatetimeIndex([], tz=ZoneInfo(tz), name=canon.INDEX_NAME)
    return build_point_frame(idx, np.array([], dtype=float))


def empty_cumulative_frame(tz: str = canon.DEFAULT_TZ) -> CumulativeFrame:
    """
    Return an empty CumulativeFrame with the correct tz-aware index and columns.
    """
    idx = pd.DatetimeIndex([], tz=ZoneInfo(tz), name=canon.INDEX_NAME)
    out = pd.DataFrame({col: pd.Series([], dtype=float) for col in canon.CUMULATIVE_COLS}, index=idx)
    out.__class__ = CumulativeFrame
    return cast(CumulativeFrame, out)


def format_api_date(d: date) -> str:
    return d.strftime(canon.API_DATE_FORMAT)


def format_iso(ts: pd.Timestamp) -> str:
    return ts.isoformat(timespec="seconds")

from __future__ import annotations
import logging
from typing import Literal, Sequence

import pandas as pd

from . import canon, exceptions, utils
from .types import IntervalReading, MeterReading, PointFrame, ReadingKind

logger = logging.getLogger(__name__)


def normalize_daily(
    samples: Sequence[IntervalReading], *, tz: str = canon.DEFAULT_TZ
) -> PointFrame:
    """
    Daily aggregates map 1:1 to points: value as float, date localised to tz.
    No aggregation and no reordering.
    """
    if not samples:
        return utils.empty_point_frame(tz)
    idx = utils.localize_index((s.date for s in samples), tz)
    values = utils.coerce_values(s.value for s in samples)
    return utils.build_point_frame(idx, values)


def _hour_buckets(
    samples: Sequence[IntervalReading],
    tz: str,
    errors: Literal["raise", "drop"],
) -> tuple[pd.DatetimeIndex, list[IntervalReading]]:
    # A reading is stamped at the end of its interval: step back one interval
    # before truncating so it lands in the hour it was measured in.
    kept: list[IntervalReading] = []
    minutes: list[int] = []
    for s in samples:
        try:
            minutes.append(utils.parse_interval_minutes(s.interval_length))
        except exceptions.IntervalHintError:
            if errors == "raise":
                raise
            continue
        kept.append(s)

    dropped = len(samples) - len(kept)
    if dropped:
        logger.warning(
            "Dropped %d load curve sample(s) with a missing or malformed interval length",
            dropped,
        )

    idx = utils.localize_index((s.date for s in kept), tz)
    shifted = idx - pd.to_timedelta(minutes, unit="min")
    return utils.floor_to_hour(pd.DatetimeIndex(shifted), tz), kept


def normalize_load_curve(
    samples: Sequence[IntervalReading],
    unit: str = "W",
    *,
    tz: str = canon.DEFAULT_TZ,
    errors: Literal["raise", "drop"] = "raise",
) -> PointFrame:
    """
    Convert sub-hour average-power samples to one mean power value per hour.

    - Each sample is shifted back by its own interval length, then truncated
      to the start of the hour, so 30-min and 10-min days compare equally.
    - Samples sharing an hour are averaged (W over one hour == Wh).
    - Output is sorted by hour.

    errors:
      - 'raise': a missing/malformed interval hint raises IntervalHintError
      - 'drop': such samples are dropped and a warning is logged
    """
    if errors not in ("raise", "drop"):
        raise ValueError("errors must be one of: raise, drop")
    factor = utils.unit_factor(unit)
    if not samples:
        return utils.empty_point_frame(tz)

    hours, kept = _hour_buckets(samples, tz, errors)
    if not kept:
        return utils.empty_point_frame(tz)

    values = pd.Series(utils.coerce_values(s.value for s in kept) * factor, index=hours)
    hourly = values.groupby(level=0, sort=True).mean().sort_index()
    return utils.build_point_frame(pd.DatetimeIndex(hourly.index), hourly.to_numpy())


def normalize_reading(
    reading: MeterReading,
    *,
    kind: ReadingKind,
    tz: str = canon.DEFAULT_TZ,
    errors: Literal["raise", "drop"] = "raise",
) -> PointFrame:
    """Dispatch a whole API response to the matching normaliser."""
    if kind == "load_curve":
        return normalize_load_curve(
            reading.interval_reading, reading.reading_type.unit, tz=tz, errors=errors
        )
    if kind == "daily":
        return normalize_daily(reading.interval_reading, tz=tz)
    raise ValueError(f"Unknown reading kind {kind!r}")

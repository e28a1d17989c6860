from __future__ import annotations
import logging
from os import PathLike
from typing import Literal

import pandas as pd

from . import canon, exceptions, normalize, utils
from .merge import merge
from .types import CumulativeFrame, IntervalReading, MeterReading

logger = logging.getLogger(__name__)


def _interval_hint(timestamp: str) -> str:
    # Half-hourly when any field after the first is '30': '…T10:30:00' and
    # '01:00:30' both qualify, so a seconds field of 30 ('…T10:00:30') does too.
    fields = timestamp.split(":")
    if canon.CSV_HALF_HOUR_FIELD in fields[1:]:
        return canon.HALF_HOUR_HINT
    return canon.HOUR_HINT


def read_csv_load_curve(path: str | PathLike[str]) -> MeterReading:
    """
    Read a 'timestamp;value' export into a load-curve MeterReading.

    - blank lines are skipped
    - a missing value reads as '0'; fields after the value are ignored
    - a missing or unreadable file yields zero samples
    """
    try:
        with open(path, encoding="utf-8") as fh:
            lines = pd.Series(fh.read().splitlines(), dtype=object)
    except FileNotFoundError:
        logger.debug("No CSV history found at %s", path)
        return MeterReading()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read CSV history at %s: %s", path, e)
        return MeterReading()

    lines = lines.str.strip()
    fields = lines[lines != ""].str.split(canon.CSV_SEPARATOR)
    dates = fields.str[0].fillna("").str.strip()
    values = fields.str[1].fillna("").str.strip().replace("", canon.CSV_DEFAULT_VALUE)

    readings = [
        IntervalReading(date=d, value=v, interval_length=_interval_hint(d))
        for d, v in zip(dates, values)
        if d
    ]
    return MeterReading(interval_reading=readings)


def _parseable(sample: IntervalReading, tz: str) -> bool:
    try:
        utils.to_local_timestamp(sample.date, tz)
        utils.coerce_values([sample.value])
    except exceptions.NormalizeError:
        return False
    return True


def csv_energy_data(
    path: str | PathLike[str],
    *,
    tz: str = canon.DEFAULT_TZ,
    errors: Literal["raise", "drop"] = "raise",
) -> CumulativeFrame:
    """
    Import a CSV load curve as an hourly cumulative series.

    Rows with an unparseable timestamp or value (a header line, 'n/a') are
    skipped with a warning; the import itself never raises on file content.
    """
    reading = read_csv_load_curve(path)
    samples = [s for s in reading.interval_reading if _parseable(s, tz)]
    skipped = len(reading.interval_reading) - len(samples)
    if skipped:
        logger.warning("Skipped %d unparseable CSV row(s) in %s", skipped, path)

    try:
        chunk = normalize.normalize_load_curve(samples, reading.reading_type.unit, tz=tz, errors=errors)
    except exceptions.NormalizeError as e:
        logger.warning("Cannot normalise CSV history at %s: %s", path, e)
        return merge([], tz=tz)
    return merge([chunk], tz=tz)

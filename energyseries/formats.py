from __future__ import annotations

from typing import List

from . import utils, validate
from .types import CumulativeFrame, CumulativePoint, NormalizedPoint, PointFrame


def to_normalized_points(df: PointFrame) -> List[NormalizedPoint]:
    """Render a point frame as [{'timestamp', 'value'}] with ISO-8601 timestamps."""
    validate.assert_points(df)
    return [
        {"timestamp": utils.format_iso(ts), "value": float(v)}
        for ts, v in zip(df.index, df["value"])
    ]


def to_cumulative_points(df: CumulativeFrame) -> List[CumulativePoint]:
    """
    Render the cumulative series as JSON-ready records:

        [{"start": "2024-01-01T10:00:00+01:00", "state": 200.0, "sum": 200.0}, ...]
    """
    validate.assert_cumulative(df)
    return [
        {"start": utils.format_iso(ts), "state": float(state), "sum": float(total)}
        for ts, state, total in zip(df.index, df["state"], df["sum"])
    ]

from __future__ import annotations
import numpy as np
import pandas as pd
from typing import cast

from . import canon, exceptions


def _assert_index(df: pd.DataFrame) -> pd.DatetimeIndex:
    if df.index.name != canon.INDEX_NAME:
        raise exceptions.CanonError(f"Index must be '{canon.INDEX_NAME}'.")
    if not isinstance(df.index, pd.DatetimeIndex):
        raise exceptions.CanonError("Index must be a DatetimeIndex.")
    idx = cast(pd.DatetimeIndex, df.index)
    if idx.tz is None:
        raise exceptions.CanonError("Index must be tz-aware.")
    return idx


def assert_points(df: pd.DataFrame, *, hourly: bool = False) -> None:
    """Check a normalised point frame; `hourly` also checks hour alignment
    and strictly increasing hours."""
    idx = _assert_index(df)
    for col in canon.POINT_COLS:
        if col not in df.columns:
            raise exceptions.CanonError(f"Missing required column '{col}'.")
    if hourly:
        if not idx.is_monotonic_increasing or not idx.is_unique:
            raise exceptions.CanonError("Hourly points must be strictly increasing.")
        if ((idx.minute != 0) | (idx.second != 0)).any():
            raise exceptions.CanonError("Hourly points must start on the hour.")


def assert_cumulative(df: pd.DataFrame) -> None:
    _assert_index(df)
    for col in canon.CUMULATIVE_COLS:
        if col not in df.columns:
            raise exceptions.CanonError(f"Missing required column '{col}'.")
    if df.empty:
        return
    state = df["state"].to_numpy(dtype=float)
    running = df["sum"].to_numpy(dtype=float)
    previous = np.concatenate(([0.0], running[:-1]))
    if not np.array_equal(running, state + previous):
        raise exceptions.CanonError("Column 'sum' must equal state plus the previous sum.")

from __future__ import annotations
import logging
from typing import Sequence, cast

import pandas as pd

from . import canon, utils
from .types import CumulativeFrame, PointFrame

logger = logging.getLogger(__name__)


def merge(chunks: Sequence[PointFrame], *, tz: str = canon.DEFAULT_TZ) -> CumulativeFrame:
    """
    Flatten window chunks (oldest first, not re-sorted) into a cumulative series.

    Output columns:
      - state: the point value
      - sum: running total, sum[i] = state[i] + sum[i-1]

    An empty result is not an error: a warning is logged and an empty
    CumulativeFrame is returned.
    """
    non_empty = [c for c in chunks if not c.empty]
    if not non_empty:
        logger.warning("Data import returned nothing !")
        return utils.empty_cumulative_frame(tz)

    points = pd.concat(non_empty)
    idx = pd.DatetimeIndex(points.index, name=canon.INDEX_NAME)
    logger.info(
        "Data import returned %d data points from %s to %s",
        len(points),
        idx[0].strftime(canon.SUMMARY_DATE_FORMAT),
        idx[-1].strftime(canon.SUMMARY_DATE_FORMAT),
    )

    state = points["value"].astype(float)
    out = pd.DataFrame({"state": state.to_numpy(), "sum": state.cumsum().to_numpy()}, index=idx)
    out.__class__ = CumulativeFrame
    return cast(CumulativeFrame, out)

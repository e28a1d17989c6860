from __future__ import annotations
import logging
from datetime import date, timedelta
from typing import Optional

from . import exceptions, normalize, utils
from .config import BackfillConfig, default_config
from .merge import merge
from .types import CumulativeFrame, MeteringSource, PointFrame, ReadingKind, Window

logger = logging.getLogger(__name__)

_LABELS = {"load_curve": "load curve", "daily": "daily data"}


def plan_window(
    today: date, offset: int, length: int, floor: Optional[date] = None
) -> Window:
    """
    Window ending `offset` days before today and spanning `length` days.

    If the floor date is after the computed start, the start is clamped to the
    floor (never past the window end) and the window is terminal.
    """
    start = today - timedelta(days=offset + length)
    end = today - timedelta(days=offset)
    if floor is not None and start < floor:
        return Window(start=min(floor, end), end=end, terminal=True)
    return Window(start=start, end=end)


def plan_recent_window(today: date, config: BackfillConfig) -> Window:
    return plan_window(today, 0, config.recent_window_days, config.floor_date)


def plan_historical_window(today: date, offset: int, config: BackfillConfig) -> Window:
    return plan_window(today, offset, config.historical_window_days, config.floor_date)


class Backfill:
    """
    Walk back from today in bounded windows and stitch the results.

    1. One load-curve fetch over the recent window. A failure is logged and
       skipped; the offset only advances on success.
    2. Up to `max_historical_iterations` daily-aggregate fetches, each one
       stride further back. The first failure ends the backfill.
    3. A window clamped to the floor date is the last one fetched.

    Fetches are awaited one at a time: each window depends on the previous
    offset.
    """

    def __init__(self, source: MeteringSource, config: Optional[BackfillConfig] = None):
        self.source = source
        self.config = config or default_config()
        self.windows: list[Window] = []

    @property
    def fetch_count(self) -> int:
        """Number of fetches issued by the last run."""
        return len(self.windows)

    async def _fetch(self, window: Window, kind: ReadingKind) -> Optional[PointFrame]:
        start, end = utils.format_api_date(window.start), utils.format_api_date(window.end)
        label = _LABELS[kind]
        self.windows.append(window)
        try:
            if kind == "load_curve":
                reading = await self.source.fetch_load_curve(start, end)
            else:
                reading = await self.source.fetch_daily_aggregate(start, end)
        except Exception as e:
            logger.debug("Cannot fetch %s from %s to %s, here is the error:", label, start, end)
            logger.warning("%s", e)
            return None

        try:
            chunk = normalize.normalize_reading(
                reading,
                kind=kind,
                tz=self.config.tz,
                errors=self.config.on_malformed_hint,
            )
        except exceptions.NormalizeError as e:
            logger.warning("Cannot normalise %s from %s to %s: %s", label, start, end, e)
            return None

        logger.debug("Successfully retrieved %s from %s to %s", label, start, end)
        return chunk

    async def run(self, today: Optional[date] = None) -> CumulativeFrame:
        cfg = self.config
        today = today or date.today()
        self.windows = []

        # newest first; reversed once before merging
        found: list[PointFrame] = []
        offset = 0

        window = plan_recent_window(today, cfg)
        chunk = await self._fetch(window, "load_curve")
        if chunk is not None:
            found.append(chunk)
            offset += cfg.recent_window_days

        if not window.terminal:
            for _ in range(cfg.max_historical_iterations):
                window = plan_historical_window(today, offset, cfg)
                chunk = await self._fetch(window, "daily")
                if chunk is None:
                    break
                found.append(chunk)
                offset += cfg.historical_window_days
                if window.terminal:
                    break

        found.reverse()
        return merge(found, tz=cfg.tz)


async def fetch_energy_data(
    source: MeteringSource,
    config: Optional[BackfillConfig] = None,
    *,
    today: Optional[date] = None,
) -> CumulativeFrame:
    """Run a full backfill against `source` and return the cumulative series."""
    return await Backfill(source, config).run(today)

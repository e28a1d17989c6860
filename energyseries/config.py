from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from typing import Literal, Mapping, Optional

from . import canon, exceptions


@dataclass(frozen=True)
class BackfillConfig:
    # Window schedule (days)
    recent_window_days: int = canon.RECENT_WINDOW_DAYS  # load-curve probe
    historical_window_days: int = canon.HISTORICAL_WINDOW_DAYS  # daily stride
    max_historical_iterations: int = canon.MAX_HISTORICAL_ITERATIONS

    # Earliest day wanted; None walks back until the API refuses
    floor_date: Optional[date] = None

    tz: str = canon.DEFAULT_TZ

    # 'raise' treats a malformed interval hint as a failed window
    on_malformed_hint: Literal["raise", "drop"] = "raise"

    def __post_init__(self) -> None:
        exceptions.require(
            self.recent_window_days > 0,
            "recent_window_days must be positive",
            exceptions.ConfigError,
        )
        exceptions.require(
            self.historical_window_days > 0,
            "historical_window_days must be positive",
            exceptions.ConfigError,
        )
        exceptions.require(
            self.max_historical_iterations >= 0,
            "max_historical_iterations must be >= 0",
            exceptions.ConfigError,
        )
        exceptions.require(
            self.on_malformed_hint in ("raise", "drop"),
            "on_malformed_hint must be one of: raise, drop",
            exceptions.ConfigError,
        )


def default_config() -> BackfillConfig:
    return BackfillConfig()


def _int_env(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise exceptions.ConfigError(f"{key} must be an integer, got {raw!r}") from e


def config_from_env(env: Optional[Mapping[str, str]] = None) -> BackfillConfig:
    """
    Build a BackfillConfig from ENERGYSERIES_* variables:
      - ENERGYSERIES_TZ
      - ENERGYSERIES_FLOOR_DATE (YYYY-MM-DD)
      - ENERGYSERIES_RECENT_DAYS, ENERGYSERIES_HISTORY_DAYS,
        ENERGYSERIES_MAX_ITERATIONS
    """
    env = os.environ if env is None else env

    floor_raw = (env.get("ENERGYSERIES_FLOOR_DATE") or "").strip()
    floor: Optional[date] = None
    if floor_raw:
        try:
            floor = date.fromisoformat(floor_raw)
        except ValueError as e:
            raise exceptions.ConfigError(
                f"ENERGYSERIES_FLOOR_DATE must be YYYY-MM-DD, got {floor_raw!r}"
            ) from e

    return BackfillConfig(
        recent_window_days=_int_env(env, "ENERGYSERIES_RECENT_DAYS", canon.RECENT_WINDOW_DAYS),
        historical_window_days=_int_env(
            env, "ENERGYSERIES_HISTORY_DAYS", canon.HISTORICAL_WINDOW_DAYS
        ),
        max_historical_iterations=_int_env(
            env, "ENERGYSERIES_MAX_ITERATIONS", canon.MAX_HISTORICAL_ITERATIONS
        ),
        floor_date=floor,
        tz=env.get("ENERGYSERIES_TZ") or canon.DEFAULT_TZ,
    )

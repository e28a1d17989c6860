from __future__ import annotations
from typing import Final, Dict

INDEX_NAME: Final[str] = "start"
POINT_COLS: Final[list[str]] = ["value"]
CUMULATIVE_COLS: Final[list[str]] = ["state", "sum"]
DEFAULT_TZ: Final[str] = "Europe/Paris"

API_DATE_FORMAT: Final[str] = "%Y-%m-%d"
SUMMARY_DATE_FORMAT: Final[str] = "%d/%m/%Y"

# Backfill schedule
RECENT_WINDOW_DAYS: Final[int] = 7
HISTORICAL_WINDOW_DAYS: Final[int] = 150
MAX_HISTORICAL_ITERATIONS: Final[int] = 10

# Load-curve unit hint -> factor to watts
UNIT_FACTORS: Dict[str, float] = {
    "W": 1.0,
    "kW": 1000.0,
}

# CSV export
CSV_SEPARATOR: Final[str] = ";"
CSV_DEFAULT_VALUE: Final[str] = "0"
CSV_HALF_HOUR_FIELD: Final[str] = "30"
HALF_HOUR_HINT: Final[str] = "PT30M"
HOUR_HINT: Final[str] = "PT60M"

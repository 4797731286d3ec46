"""Translation tables from tool input vocabulary to upstream parameters.

Every table is total over its input enumeration. Values with no natural
upstream analogue map to an explicit fallback.
"""

from __future__ import annotations

from typing import Literal

Period = Literal["annual", "quarterly", "ttm"]
Interval = Literal["day", "1min", "5min", "15min", "30min", "1hour", "4hour"]
FilingType = Literal["10-K", "10-Q", "8-K"]
Quarter = Literal[1, 2, 3, 4]

# ttm has no statement endpoint equivalent; annual is the fallback
PERIOD_MAP: dict[str, str] = {
    "annual": "annual",
    "quarterly": "quarter",
    "ttm": "annual",
}

EOD_PRICE_PATH = "/historical-price-eod/full"

INTERVAL_PATHS: dict[str, str] = {
    "day": EOD_PRICE_PATH,
    "1min": "/historical-chart/1min",
    "5min": "/historical-chart/5min",
    "15min": "/historical-chart/15min",
    "30min": "/historical-chart/30min",
    "1hour": "/historical-chart/1hour",
    "4hour": "/historical-chart/4hour",
}

# /financial-reports-json period values: FY for a 10-K, Qn for a 10-Q
ANNUAL_REPORT_PERIOD = "FY"

QUARTER_PERIODS: dict[int, str] = {
    1: "Q1",
    2: "Q2",
    3: "Q3",
    4: "Q4",
}


def map_period(period: str) -> str:
    """Map a reporting period choice to the upstream ``period`` value.

    Raises:
        ValueError: If *period* is not one of ``annual``, ``quarterly``, ``ttm``.
    """
    try:
        return PERIOD_MAP[period]
    except KeyError:
        msg = f"Unknown period: {period!r}"
        raise ValueError(msg) from None


def price_path(interval: str) -> str:
    """Return the upstream path serving prices at *interval*.

    Raises:
        ValueError: If *interval* is not supported.
    """
    try:
        return INTERVAL_PATHS[interval]
    except KeyError:
        msg = f"Unknown interval: {interval!r}"
        raise ValueError(msg) from None

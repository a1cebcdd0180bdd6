# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""Period-over-period growth of key metrics."""

import math

from .metrics import FinancialMetrics

# metric field -> output key
TREND_KEYS: dict[str, str] = {
    "revenue": "revenue_growth",
    "net_income": "profit_growth",
    "assets": "asset_growth",
    "equity": "equity_growth",
}


def _growth_pct(current: float, previous: float) -> float:
    # No guard on a zero previous value: the growth is infinite, or
    # undefined (NaN) when both values are zero.
    if previous == 0:
        if current == 0:
            return math.nan
        return math.copysign(math.inf, current)
    return (current - previous) / previous * 100


def calculate_trend_analysis(
    current: FinancialMetrics, previous: FinancialMetrics
) -> dict[str, float]:
    """
    Compute growth percentages between two periods.

    Only metrics known in both periods are reported, under the keys of
    TREND_KEYS. Growth from a zero previous value is +/- infinity (NaN
    when both values are zero).
    """
    trends: dict[str, float] = {}

    for name, key in TREND_KEYS.items():
        now = getattr(current, name)
        before = getattr(previous, name)
        if now is None or before is None:
            continue
        trends[key] = _growth_pct(now, before)

    return trends

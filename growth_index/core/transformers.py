from __future__ import annotations

import logging
from typing import List, Sequence

from .errors import InsufficientHistoryError
from .metrics import (
    GrowthMetrics,
    OverviewScalars,
    RawYearlyFinancials,
    clamp,
    round_half_away,
    round_series,
)

logger = logging.getLogger(__name__)

REQUIRED_YEARS = 4
LOOKBACK_YEARS = REQUIRED_YEARS - 1

RISK_FREE_RATE = 4.5
MARKET_RISK_PREMIUM = 5.5
BETA_FLOOR = 0.5
BETA_CAP = 2.5

METRIC_DECIMALS = 1


def cagr(start: float, end: float, years: int = LOOKBACK_YEARS) -> float:
    """Compound annual growth rate in percent, defined across sign changes.

    ``start`` is the oldest value and ``end`` the newest. When either value is
    non-positive a ratio-based CAGR is undefined, so the swing is spread
    linearly over ``years`` relative to the magnitude of the base instead.
    """

    if years <= 0 or start == 0:
        return 0.0
    if start < 0 and end > 0:
        return ((end - start) / abs(start)) * 100 / years
    if start > 0 and end < 0:
        return ((end - start) / start) * 100 / years
    if start < 0 and end < 0:
        # Shrinking losses count as growth.
        return ((abs(start) - abs(end)) / abs(start)) * 100 / years
    return ((end / start) ** (1 / years) - 1) * 100


def yoy_growth(previous: float, current: float) -> float:
    if previous == 0:
        return 0.0
    return ((current - previous) / abs(previous)) * 100


def operating_margin(year: RawYearlyFinancials) -> float:
    if year.total_revenue <= 0:
        return 0.0
    return year.operating_income / year.total_revenue * 100


def estimate_wacc(beta: float) -> float:
    """CAPM-style cost of capital with the beta bounded to a sane range."""

    return RISK_FREE_RATE + clamp(beta, BETA_FLOOR, BETA_CAP) * MARKET_RISK_PREMIUM


class MetricsDeriver:
    """Turn four newest-first fiscal years into :class:`GrowthMetrics`."""

    def __init__(self, *, ticker: str = "") -> None:
        self.ticker = ticker

    def derive(self, years: Sequence[RawYearlyFinancials], overview: OverviewScalars) -> GrowthMetrics:
        if len(years) < REQUIRED_YEARS:
            raise InsufficientHistoryError(self.ticker, len(years))

        newest, oldest = years[0], years[LOOKBACK_YEARS]

        revenue_cagr = cagr(oldest.total_revenue, newest.total_revenue, LOOKBACK_YEARS)
        eps_cagr = cagr(oldest.earnings, newest.earnings, LOOKBACK_YEARS)
        fcf_cagr = cagr(oldest.free_cash_flow, newest.free_cash_flow, LOOKBACK_YEARS)
        margin_delta = operating_margin(newest) - operating_margin(oldest)

        # Oldest pair first: (y3 -> y2), (y2 -> y1), (y1 -> y0).
        annual_revenue_growth: List[float] = [
            yoy_growth(years[index + 1].total_revenue, years[index].total_revenue)
            for index in range(LOOKBACK_YEARS - 1, -1, -1)
        ]

        metrics = GrowthMetrics(
            revenue_cagr=round_half_away(revenue_cagr, METRIC_DECIMALS),
            eps_cagr=round_half_away(eps_cagr, METRIC_DECIMALS),
            fcf_cagr=round_half_away(fcf_cagr, METRIC_DECIMALS),
            margin_delta=round_half_away(margin_delta, METRIC_DECIMALS),
            annual_revenue_growth=round_series(annual_revenue_growth, METRIC_DECIMALS),
            roic=round_half_away(overview.return_on_equity * 100, METRIC_DECIMALS),
            wacc=round_half_away(estimate_wacc(overview.beta), METRIC_DECIMALS),
        )
        logger.debug("Derived growth metrics for %s: %s", self.ticker or "<unknown>", metrics)
        return metrics

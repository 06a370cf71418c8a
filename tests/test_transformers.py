"""Tests for the CAGR primitives and the metrics deriver."""

from __future__ import annotations

import pytest

from growth_index.core.errors import InsufficientHistoryError
from growth_index.core.metrics import OverviewScalars, RawYearlyFinancials
from growth_index.core.transformers import (
    MetricsDeriver,
    cagr,
    estimate_wacc,
    operating_margin,
    yoy_growth,
)
from growth_index.data.adapters import ProviderKind, adapt


def _year(revenue: float, operating_income: float = 0.0, earnings: float = 0.0,
          ocf: float = 0.0, capex: float = 0.0) -> RawYearlyFinancials:
    return RawYearlyFinancials(
        total_revenue=revenue,
        operating_income=operating_income,
        earnings=earnings,
        operating_cash_flow=ocf,
        capital_expenditures=capex,
    )


# ---------------------------------------------------------------------------
# cagr
# ---------------------------------------------------------------------------


def test_cagr_positive_to_positive_uses_compound_form():
    assert cagr(100, 200, 3) == pytest.approx((2 ** (1 / 3) - 1) * 100)


def test_cagr_negative_to_positive_is_linear_over_base_magnitude():
    """-100 -> 50 is a 150% swing spread over three years, not a compound rate."""
    assert cagr(-100, 50, 3) == pytest.approx(50.0)


def test_cagr_positive_to_negative():
    assert cagr(100, -50, 3) == pytest.approx(-50.0)


def test_cagr_shrinking_losses_register_as_growth():
    assert cagr(-100, -40, 3) == pytest.approx(20.0)
    assert cagr(-40, -100, 3) == pytest.approx(-50.0)


def test_cagr_no_growth_is_zero():
    assert cagr(100, 100, 3) == 0


def test_cagr_zero_base_and_zero_years_are_guarded():
    assert cagr(0, 50, 3) == 0
    assert cagr(100, 200, 0) == 0
    assert cagr(100, 200, -1) == 0


def test_cagr_positive_to_zero_is_total_loss():
    assert cagr(100, 0, 3) == pytest.approx(-100.0)


# ---------------------------------------------------------------------------
# small helpers
# ---------------------------------------------------------------------------


def test_yoy_growth_uses_absolute_previous_value():
    assert yoy_growth(100, 110) == pytest.approx(10.0)
    assert yoy_growth(-100, -50) == pytest.approx(50.0)
    assert yoy_growth(0, 500) == 0


def test_operating_margin_zero_when_revenue_not_positive():
    assert operating_margin(_year(200, operating_income=50)) == pytest.approx(25.0)
    assert operating_margin(_year(0, operating_income=50)) == 0
    assert operating_margin(_year(-10, operating_income=50)) == 0


@pytest.mark.parametrize(
    "beta, expected",
    [(1.0, 10.0), (1.2, 11.1), (0.1, 7.25), (5.0, 18.25)],
)
def test_estimate_wacc_clamps_beta(beta, expected):
    assert estimate_wacc(beta) == pytest.approx(expected)


# ---------------------------------------------------------------------------
# MetricsDeriver
# ---------------------------------------------------------------------------


def test_derive_acme(acme_payload):
    years, overview = adapt(ProviderKind.ALPHA_VANTAGE, acme_payload, ticker="ACME")
    metrics = MetricsDeriver(ticker="ACME").derive(years, overview)

    assert metrics.revenue_cagr == pytest.approx(10.0)
    assert metrics.eps_cagr == pytest.approx(26.0)
    assert metrics.fcf_cagr == pytest.approx(26.0)
    assert metrics.margin_delta == pytest.approx(5.0)
    assert metrics.annual_revenue_growth == pytest.approx((10.0, 10.0, 10.0))
    assert metrics.roic == pytest.approx(25.0)
    assert metrics.wacc == pytest.approx(11.1)


def test_derive_globex_rounds_half_away_from_zero(globex_payload):
    """Beta 0.3 is floored to 0.5, giving a WACC of exactly 7.25 -> 7.3."""
    years, overview = adapt(ProviderKind.YAHOO, globex_payload, ticker="GLBX")
    metrics = MetricsDeriver(ticker="GLBX").derive(years, overview)

    assert metrics.wacc == pytest.approx(7.3)
    assert metrics.roic == pytest.approx(15.0)
    assert metrics.revenue_cagr == pytest.approx(9.1)
    assert metrics.eps_cagr == pytest.approx(133.3)
    assert metrics.fcf_cagr == pytest.approx(26.0)
    assert metrics.margin_delta == pytest.approx(5.0)
    assert metrics.annual_revenue_growth == pytest.approx((10.0, 9.1, 8.3))


def test_derive_growth_series_is_oldest_pair_first():
    years = [_year(160), _year(150), _year(120), _year(100)]
    metrics = MetricsDeriver().derive(years, OverviewScalars())
    assert metrics.annual_revenue_growth == pytest.approx((20.0, 25.0, 6.7))
    assert len(metrics.annual_revenue_growth) == 3


def test_derive_reads_start_from_oldest_year():
    """Index 3 is the start value; shrinking revenue must yield negative CAGR."""
    years = [_year(100), _year(120), _year(150), _year(200)]
    metrics = MetricsDeriver().derive(years, OverviewScalars())
    assert metrics.revenue_cagr < 0


def test_derive_ignores_years_beyond_four():
    years = [_year(133.1), _year(121), _year(110), _year(100), _year(1)]
    metrics = MetricsDeriver().derive(years, OverviewScalars())
    assert metrics.revenue_cagr == pytest.approx(10.0)


def test_derive_requires_four_years():
    with pytest.raises(InsufficientHistoryError) as excinfo:
        MetricsDeriver(ticker="NEW").derive([_year(1), _year(2), _year(3)], OverviewScalars())
    assert excinfo.value.years_available == 3
    assert excinfo.value.ticker == "NEW"

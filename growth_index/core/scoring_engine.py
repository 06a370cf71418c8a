from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .metrics import (
    DEFAULT_WEIGHTS,
    CompanyResult,
    ComponentContributions,
    GrowthIndexResult,
    GrowthMetrics,
    Weights,
    round_half_away,
)
from growth_index.scoring.consistency import consistency_factor
from growth_index.scoring.interpretation import interpret_growth_index
from growth_index.scoring.quality import quality_factor
from growth_index.scoring.utils import weighted_contributions

SCORE_DECIMALS = 2
FACTOR_DECIMALS = 3


def calculate_growth_index(
    metrics: GrowthMetrics, weights: Weights = DEFAULT_WEIGHTS
) -> GrowthIndexResult:
    """Compute ``GI = (w1*Rg + w2*Eg + w3*FCFg + w4*M_delta) * Cf * Qf``.

    Weights are applied as given. Every output is rounded exactly once, here.
    """

    components = weighted_contributions(
        {
            "revenue": metrics.revenue_cagr,
            "eps": metrics.eps_cagr,
            "fcf": metrics.fcf_cagr,
            "margin": metrics.margin_delta,
        },
        weights.to_dict(),
    )
    base_score = components["revenue"] + components["eps"] + components["fcf"] + components["margin"]

    cf = consistency_factor(metrics.annual_revenue_growth)
    qf = quality_factor(metrics.roic, metrics.wacc)
    growth_index = base_score * cf * qf

    return GrowthIndexResult(
        growth_index=round_half_away(growth_index, SCORE_DECIMALS),
        base_score=round_half_away(base_score, SCORE_DECIMALS),
        consistency_factor=round_half_away(cf, FACTOR_DECIMALS),
        quality_factor=round_half_away(qf, FACTOR_DECIMALS),
        components=ComponentContributions(
            **{key: round_half_away(value, SCORE_DECIMALS) for key, value in components.items()}
        ),
    )


@dataclass(frozen=True, slots=True)
class NamedMetrics:
    name: str
    metrics: GrowthMetrics
    ticker: Optional[str] = None


def evaluate_company(
    name: str, metrics: GrowthMetrics, *, ticker: Optional[str] = None, weights: Weights = DEFAULT_WEIGHTS
) -> CompanyResult:
    """Score one company and attach its interpretation."""

    result = calculate_growth_index(metrics, weights)
    return CompanyResult(
        ticker=(ticker or name).upper(),
        name=name,
        result=result,
        metrics=metrics,
        interpretation=interpret_growth_index(result.growth_index),
    )


def compare_companies(
    companies: Iterable[NamedMetrics], *, weights: Weights = DEFAULT_WEIGHTS
) -> List[CompanyResult]:
    """Evaluate and rank companies by growth index, highest first."""

    results = [
        evaluate_company(item.name, item.metrics, ticker=item.ticker, weights=weights)
        for item in companies
    ]
    return sorted(results, key=lambda item: item.growth_index, reverse=True)


EXAMPLE_COMPANIES: Dict[str, NamedMetrics] = {
    "META": NamedMetrics(
        name="Meta Platforms",
        ticker="META",
        metrics=GrowthMetrics(
            revenue_cagr=18.8,
            eps_cagr=66.7,
            fcf_cagr=67.5,
            margin_delta=8.3,
            annual_revenue_growth=(15.7, 21.9, 21.3),
            roic=34.0,
            wacc=12.7,
        ),
    ),
    "AAPL": NamedMetrics(
        name="Apple",
        ticker="AAPL",
        metrics=GrowthMetrics(
            revenue_cagr=-0.4,
            eps_cagr=-0.2,
            fcf_cagr=-1.2,
            margin_delta=1.0,
            annual_revenue_growth=(-2.8, 2.0, 6.4),
            roic=48.0,
            wacc=10.1,
        ),
    ),
    "NVDA": NamedMetrics(
        name="NVIDIA",
        ticker="NVDA",
        metrics=GrowthMetrics(
            revenue_cagr=94.0,
            eps_cagr=150.0,
            fcf_cagr=85.0,
            margin_delta=15.0,
            annual_revenue_growth=(60.0, 120.0, 100.0),
            roic=45.0,
            wacc=11.5,
        ),
    ),
}

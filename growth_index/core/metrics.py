from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict, Mapping, Sequence, Tuple, Type


@dataclass(frozen=True, slots=True)
class RawYearlyFinancials:
    """One fiscal year of provider-neutral statement data."""

    total_revenue: float
    operating_income: float
    earnings: float
    operating_cash_flow: float
    capital_expenditures: float
    fiscal_year_end: str = ""

    @property
    def free_cash_flow(self) -> float:
        # Providers disagree on the sign of capex, so only its magnitude counts.
        return self.operating_cash_flow - abs(self.capital_expenditures)


@dataclass(frozen=True, slots=True)
class OverviewScalars:
    """Company-level scalars taken from the provider overview."""

    beta: float = 1.0
    return_on_equity: float = 0.15


@dataclass(frozen=True, slots=True)
class GrowthMetrics:
    """Normalized growth inputs, all expressed as percentages."""

    revenue_cagr: float
    eps_cagr: float
    fcf_cagr: float
    margin_delta: float
    annual_revenue_growth: Tuple[float, ...]
    roic: float
    wacc: float

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["annual_revenue_growth"] = list(self.annual_revenue_growth)
        return data

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "GrowthMetrics":
        return cls(
            revenue_cagr=float(payload["revenue_cagr"]),
            eps_cagr=float(payload["eps_cagr"]),
            fcf_cagr=float(payload["fcf_cagr"]),
            margin_delta=float(payload["margin_delta"]),
            annual_revenue_growth=tuple(float(item) for item in payload.get("annual_revenue_growth", ())),
            roic=float(payload["roic"]),
            wacc=float(payload["wacc"]),
        )


@dataclass(frozen=True, slots=True)
class Weights:
    """Factor weights for the base score.

    Weights are used exactly as given; they are never renormalized.
    """

    revenue: float = 0.35
    eps: float = 0.30
    fcf: float = 0.20
    margin: float = 0.15

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls: Type["Weights"], payload: Mapping[str, float]) -> "Weights":
        defaults = cls()
        return cls(
            revenue=float(payload.get("revenue", defaults.revenue)),
            eps=float(payload.get("eps", defaults.eps)),
            fcf=float(payload.get("fcf", defaults.fcf)),
            margin=float(payload.get("margin", defaults.margin)),
        )

    @classmethod
    def preset(cls, name: str) -> "Weights":
        try:
            return WEIGHT_PRESETS[name.lower()]
        except KeyError:
            known = ", ".join(sorted(WEIGHT_PRESETS))
            raise ValueError(f"Unknown weight preset '{name}' (expected one of: {known})") from None


DEFAULT_WEIGHTS = Weights(revenue=0.35, eps=0.30, fcf=0.20, margin=0.15)
DISPLAY_WEIGHTS = Weights(revenue=0.30, eps=0.25, fcf=0.25, margin=0.20)

WEIGHT_PRESETS: Dict[str, Weights] = {
    "default": DEFAULT_WEIGHTS,
    "display": DISPLAY_WEIGHTS,
}


@dataclass(frozen=True, slots=True)
class ComponentContributions:
    revenue: float
    eps: float
    fcf: float
    margin: float


@dataclass(frozen=True, slots=True)
class GrowthIndexResult:
    growth_index: float
    base_score: float
    consistency_factor: float
    quality_factor: float
    components: ComponentContributions

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Interpretation:
    label: str
    description: str
    color: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class CompanyResult:
    """Successful growth index evaluation for one ticker."""

    ticker: str
    name: str
    result: GrowthIndexResult
    metrics: GrowthMetrics
    interpretation: Interpretation

    @property
    def growth_index(self) -> float:
        return self.result.growth_index

    def to_dict(self) -> Dict[str, object]:
        return {
            "ticker": self.ticker,
            "name": self.name,
            **self.result.to_dict(),
            "metrics": self.metrics.to_dict(),
            "interpretation": self.interpretation.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class TickerFailure:
    ticker: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {"ticker": self.ticker, "error": self.reason}


def clamp(value: float, min_value: float = 0.0, max_value: float = 1.0) -> float:
    """Keep a value inside ``[min_value, max_value]``."""

    return max(min_value, min(max_value, value))


def round_half_away(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals, sending exact halves away from zero.

    Unlike :func:`round`, halves never go to the even neighbour.
    """

    factor = 10 ** digits
    return math.copysign(math.floor(abs(value) * factor + 0.5), value) / factor


def round_series(values: Sequence[float], digits: int) -> Tuple[float, ...]:
    return tuple(round_half_away(value, digits) for value in values)

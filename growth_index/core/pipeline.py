from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple, Union

import pandas as pd

from .metrics import DEFAULT_WEIGHTS, CompanyResult, TickerFailure, Weights
from .scoring_engine import evaluate_company
from .transformers import MetricsDeriver
from growth_index.data.adapters import ProviderKind, adapt, company_name

if TYPE_CHECKING:
    from growth_index.core.settings import EngineSettings

logger = logging.getLogger(__name__)

BatchEntry = Union[CompanyResult, TickerFailure]


class StatementSource(Protocol):
    kind: ProviderKind

    def statements(self, ticker: str) -> Dict[str, Any]:
        ...


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Per-ticker outcomes of one batch, in input order."""

    entries: Tuple[BatchEntry, ...]

    @property
    def successes(self) -> List[CompanyResult]:
        return [entry for entry in self.entries if isinstance(entry, CompanyResult)]

    @property
    def failures(self) -> List[TickerFailure]:
        return [entry for entry in self.entries if isinstance(entry, TickerFailure)]

    @property
    def success(self) -> bool:
        return any(isinstance(entry, CompanyResult) for entry in self.entries)

    @property
    def error(self) -> Optional[str]:
        if self.success:
            return None
        return "; ".join(failure.reason for failure in self.failures)

    def ranked(self) -> List[CompanyResult]:
        """Successful results ordered by growth index, highest first."""

        return sorted(self.successes, key=lambda item: item.growth_index, reverse=True)

    def to_dict(self) -> Dict[str, object]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "data": [item.to_dict() for item in self.successes],
            "failures": [item.to_dict() for item in self.failures],
        }

    def to_frame(self) -> pd.DataFrame:
        columns = [
            "ticker",
            "name",
            "growth_index",
            "label",
            "base_score",
            "consistency_factor",
            "quality_factor",
            "revenue_cagr",
            "eps_cagr",
            "fcf_cagr",
            "margin_delta",
            "roic",
            "wacc",
        ]
        rows = [
            {
                "ticker": item.ticker,
                "name": item.name,
                "growth_index": item.result.growth_index,
                "label": item.interpretation.label,
                "base_score": item.result.base_score,
                "consistency_factor": item.result.consistency_factor,
                "quality_factor": item.result.quality_factor,
                "revenue_cagr": item.metrics.revenue_cagr,
                "eps_cagr": item.metrics.eps_cagr,
                "fcf_cagr": item.metrics.fcf_cagr,
                "margin_delta": item.metrics.margin_delta,
                "roic": item.metrics.roic,
                "wacc": item.metrics.wacc,
            }
            for item in self.ranked()
        ]
        return pd.DataFrame(rows, columns=columns)


class CompanyPipeline:
    """Adapt, derive, score and interpret one ticker."""

    def __init__(self, provider: ProviderKind | str, *, weights: Weights = DEFAULT_WEIGHTS) -> None:
        self.provider = ProviderKind(provider)
        self.weights = weights

    def evaluate_payload(self, ticker: str, payload: Mapping[str, Any]) -> CompanyResult:
        years, overview = adapt(self.provider, payload, ticker=ticker)
        metrics = MetricsDeriver(ticker=ticker).derive(years, overview)
        return evaluate_company(
            company_name(self.provider, payload, default=ticker),
            metrics,
            ticker=ticker,
            weights=self.weights,
        )

    def evaluate(self, ticker: str, source: StatementSource) -> CompanyResult:
        return self.evaluate_payload(ticker, source.statements(ticker))


class BatchOrchestrator:
    """Run the company pipeline over a bounded list of tickers.

    A failing ticker never aborts its siblings; it is reported as a
    :class:`TickerFailure` in its input position.
    """

    def __init__(
        self,
        source: StatementSource,
        *,
        provider: Optional[ProviderKind | str] = None,
        weights: Weights = DEFAULT_WEIGHTS,
        max_count: Optional[int] = None,
        max_workers: int = 1,
    ) -> None:
        self.source = source
        self.pipeline = CompanyPipeline(provider or source.kind, weights=weights)
        self.max_count = max_count
        self.max_workers = max(1, max_workers)

    @classmethod
    def from_settings(cls, source: StatementSource, settings: "EngineSettings") -> "BatchOrchestrator":
        return cls(
            source,
            weights=settings.weights,
            max_count=settings.max_tickers_for(source.kind.value),
            max_workers=settings.max_workers,
        )

    def run(self, tickers: Iterable[str], max_count: Optional[int] = None) -> BatchResult:
        limit = self.max_count if max_count is None else max_count
        selected = [ticker.strip().upper() for ticker in tickers]
        if limit is not None:
            selected = selected[: max(limit, 0)]

        if self.max_workers == 1 or len(selected) < 2:
            entries = [self._run_one(ticker) for ticker in selected]
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                entries = list(executor.map(self._run_one, selected))

        result = BatchResult(entries=tuple(entries))
        logger.info(
            "Batch finished: %d succeeded, %d failed", len(result.successes), len(result.failures)
        )
        return result

    def _run_one(self, ticker: str) -> BatchEntry:
        try:
            company = self.pipeline.evaluate(ticker, self.source)
        except Exception as exc:  # noqa: BLE001
            logger.warning("[GI] %s: %s", ticker, exc)
            return TickerFailure(ticker=ticker, reason=str(exc))
        logger.info("[GI] %s: %.2f (%s)", ticker, company.growth_index, company.interpretation.label)
        return company


def run_batch(
    tickers: Iterable[str],
    max_count: Optional[int],
    *,
    source: StatementSource,
    weights: Weights = DEFAULT_WEIGHTS,
    max_workers: int = 1,
) -> BatchResult:
    """Convenience wrapper around :class:`BatchOrchestrator`."""

    orchestrator = BatchOrchestrator(source, weights=weights, max_workers=max_workers)
    return orchestrator.run(tickers, max_count=max_count)

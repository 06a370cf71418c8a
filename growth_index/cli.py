"""Command line entry point: score a handful of tickers and print the ranking."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from growth_index.core.metrics import WEIGHT_PRESETS, Weights
from growth_index.core.pipeline import BatchOrchestrator, BatchResult
from growth_index.core.settings import EngineSettings
from growth_index.data.adapters import ProviderKind
from growth_index.data.credentials import ALPHA_VANTAGE_KEY_ENV, resolve_api_key
from growth_index.data.providers import (
    AlphaVantageProvider,
    BaseProvider,
    DataProviderError,
    ProviderConfig,
    YahooProvider,
)
from growth_index.data.sample_provider import SampleProvider

SOURCES = ("yahoo", "alphavantage", "sample")


def build_provider(source: str, settings: EngineSettings, *, api_key: Optional[str] = None) -> BaseProvider:
    if source == "sample":
        return SampleProvider(ProviderKind.ALPHA_VANTAGE)
    if source == "alphavantage":
        key = resolve_api_key(ALPHA_VANTAGE_KEY_ENV, api_key)
        if not key:
            raise DataProviderError(f"Alpha Vantage API key required (set {ALPHA_VANTAGE_KEY_ENV} or pass --api-key)")
        return AlphaVantageProvider(
            ProviderConfig(base_url=AlphaVantageProvider.BASE_URL, api_key=key),
            request_delay=settings.alpha_vantage_request_delay,
        )
    return YahooProvider()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="growth-index", description=__doc__)
    parser.add_argument("tickers", nargs="+", help="Ticker symbols to score")
    parser.add_argument("--source", choices=SOURCES, default="yahoo", help="Statement provider")
    parser.add_argument("--weights", choices=sorted(WEIGHT_PRESETS), default=None, help="Weight preset")
    parser.add_argument("--max-count", type=int, default=None, help="Override the provider ticker cap")
    parser.add_argument("--workers", type=int, default=None, help="Parallel ticker pipelines")
    parser.add_argument("--api-key", default=None, help=f"Alpha Vantage key (defaults to ${ALPHA_VANTAGE_KEY_ENV})")
    parser.add_argument("--json", action="store_true", help="Print the JSON envelope instead of a table")
    return parser.parse_args(argv)


def render(result: BatchResult, *, as_json: bool) -> str:
    if as_json:
        return json.dumps(result.to_dict(), indent=2)
    if not result.success:
        return f"Error: {result.error}"
    lines = [result.to_frame().to_string(index=False)]
    for failure in result.failures:
        lines.append(f"! {failure.ticker}: {failure.reason}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = EngineSettings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        provider = build_provider(args.source, settings, api_key=args.api_key)
    except DataProviderError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    weights = Weights.preset(args.weights) if args.weights else settings.weights
    orchestrator = BatchOrchestrator(
        provider,
        weights=weights,
        max_count=args.max_count if args.max_count is not None else settings.max_tickers_for(provider.kind.value),
        max_workers=args.workers if args.workers is not None else settings.max_workers,
    )
    try:
        result = orchestrator.run(args.tickers)
    finally:
        provider.close()

    print(render(result, as_json=args.json))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import abc
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import pandas as pd
import requests
import yfinance as yf

from .adapters import ProviderKind

logger = logging.getLogger(__name__)


class DataProviderError(RuntimeError):
    """Raised when a data provider returns an error response."""


@dataclass(slots=True)
class ProviderConfig:
    base_url: str
    api_key: str
    session: Optional[requests.Session] = None

    def get_session(self) -> requests.Session:
        if self.session is None:
            self.session = requests.Session()
        return self.session


class BaseProvider(abc.ABC):
    """Fetch raw annual statement payloads for a single provider."""

    kind: ProviderKind

    def __init__(self, config: Optional[ProviderConfig] = None) -> None:
        self.config = config

    @abc.abstractmethod
    def statements(self, ticker: str) -> Dict[str, Any]:
        """Return the provider payload consumed by :func:`growth_index.data.adapters.adapt`."""

    def close(self) -> None:
        if self.config is not None and self.config.session is not None:
            self.config.session.close()


class AlphaVantageProvider(BaseProvider):
    """Alpha Vantage ``query`` endpoint client.

    The free tier is heavily rate limited, so successive calls for one ticker
    are spaced by ``request_delay`` seconds.
    """

    kind = ProviderKind.ALPHA_VANTAGE
    BASE_URL = "https://www.alphavantage.co/query"

    def __init__(
        self,
        config: ProviderConfig,
        *,
        request_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__(config)
        self.request_delay = request_delay
        self._sleep = sleep

    def _get(self, function: str, ticker: str) -> Dict[str, Any]:
        if self.config is None or not self.config.api_key:
            raise DataProviderError("Alpha Vantage API key not provided")
        logger.info("[AV] %s %s", function, ticker)
        response = self.config.get_session().get(
            self.config.base_url,
            params={"function": function, "symbol": ticker, "apikey": self.config.api_key},
            timeout=30,
        )
        if response.status_code != 200:
            raise DataProviderError(f"Alpha Vantage {response.status_code}")
        data = response.json()
        if data.get("Error Message"):
            raise DataProviderError(str(data["Error Message"]))
        if data.get("Note") or data.get("Information"):
            raise DataProviderError("Rate limit - wait 60s")
        return data

    def statements(self, ticker: str) -> Dict[str, Any]:
        income = self._get("INCOME_STATEMENT", ticker)
        self._sleep(self.request_delay)
        cash_flow = self._get("CASH_FLOW", ticker)
        self._sleep(self.request_delay)
        overview = self._get("OVERVIEW", ticker)
        self._sleep(self.request_delay)
        earnings = self._get("EARNINGS", ticker)
        return {"income_statement": income, "cash_flow": cash_flow, "overview": overview, "earnings": earnings}


# Row labels used by yfinance statement frames, first match wins.
_YF_INCOME_ROWS = {
    "totalRevenue": ["Total Revenue", "Operating Revenue"],
    "operatingIncome": ["Operating Income", "Total Operating Income As Reported"],
    "netIncome": ["Net Income", "Net Income Common Stockholders"],
    "dilutedEPS": ["Diluted EPS"],
    "basicEPS": ["Basic EPS"],
}
_YF_CASH_FLOW_ROWS = {
    "totalCashFromOperatingActivities": ["Operating Cash Flow", "Cash Flow From Continuing Operating Activities"],
    "capitalExpenditures": ["Capital Expenditure"],
}


class YahooProvider(BaseProvider):
    """Yahoo Finance via :mod:`yfinance`, reshaped into the quoteSummary layout."""

    kind = ProviderKind.YAHOO

    def __init__(self, ticker_factory: Optional[Callable[[str], Any]] = None) -> None:
        super().__init__(config=None)
        self._ticker_factory = ticker_factory

    def _ticker(self, symbol: str) -> Any:
        if self._ticker_factory is not None:
            return self._ticker_factory(symbol)
        return yf.Ticker(symbol)

    def statements(self, ticker: str) -> Dict[str, Any]:
        logger.info("[YF] Fetching %s", ticker)
        handle = self._ticker(ticker)
        try:
            income = handle.income_stmt
            cash_flow = handle.cashflow
            info = handle.info or {}
        except Exception as exc:  # noqa: BLE001
            raise DataProviderError(f"Yahoo Finance request failed for {ticker}: {exc}") from exc

        return {
            "incomeStatementHistory": {"incomeStatementHistory": _frame_to_records(income, _YF_INCOME_ROWS)},
            "cashflowStatementHistory": {"cashflowStatements": _frame_to_records(cash_flow, _YF_CASH_FLOW_ROWS)},
            "defaultKeyStatistics": {"beta": info.get("beta")},
            "financialData": {"returnOnEquity": info.get("returnOnEquity")},
            "price": {"longName": info.get("longName"), "shortName": info.get("shortName")},
        }


def _frame_to_records(frame: Optional[pd.DataFrame], rows: Dict[str, List[str]]) -> List[Dict[str, Any]]:
    """Flatten a yfinance statement (rows = line items, columns = period ends), newest first."""

    if frame is None or frame.empty:
        return []
    records: List[Dict[str, Any]] = []
    for column in sorted(frame.columns, reverse=True):
        record: Dict[str, Any] = {"endDate": pd.Timestamp(column).date().isoformat()}
        for field, labels in rows.items():
            record[field] = None
            for label in labels:
                if label in frame.index:
                    value = frame.loc[label, column]
                    if pd.notna(value):
                        record[field] = float(value)
                        break
        records.append(record)
    return records

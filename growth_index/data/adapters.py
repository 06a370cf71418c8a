"""Map provider statement payloads onto provider-neutral yearly records."""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from growth_index.core.errors import InsufficientHistoryError
from growth_index.core.metrics import OverviewScalars, RawYearlyFinancials
from growth_index.core.transformers import REQUIRED_YEARS

DEFAULT_BETA = 1.0
DEFAULT_RETURN_ON_EQUITY = 0.15


class ProviderKind(str, enum.Enum):
    ALPHA_VANTAGE = "alphavantage"
    YAHOO = "yahoo"


@dataclass(frozen=True, slots=True)
class StatementSchema:
    """Where one provider keeps each field of its annual statements."""

    provider: ProviderKind
    income_path: Tuple[str, ...]
    cash_flow_path: Tuple[str, ...]
    revenue: str
    operating_income: str
    eps_fields: Tuple[str, ...]
    net_income: str
    operating_cash_flow: str
    capital_expenditures: str
    fiscal_date: str
    beta_path: Tuple[str, ...]
    return_on_equity_path: Tuple[str, ...]
    name_paths: Tuple[Tuple[str, ...], ...]
    earnings_path: Optional[Tuple[str, ...]] = None


ALPHA_VANTAGE_SCHEMA = StatementSchema(
    provider=ProviderKind.ALPHA_VANTAGE,
    income_path=("income_statement", "annualReports"),
    cash_flow_path=("cash_flow", "annualReports"),
    revenue="totalRevenue",
    operating_income="operatingIncome",
    eps_fields=("reportedEPS",),
    net_income="netIncome",
    operating_cash_flow="operatingCashflow",
    capital_expenditures="capitalExpenditures",
    fiscal_date="fiscalDateEnding",
    beta_path=("overview", "Beta"),
    return_on_equity_path=("overview", "ReturnOnEquityTTM"),
    name_paths=(("overview", "Name"),),
    earnings_path=("earnings", "annualEarnings"),
)

YAHOO_SCHEMA = StatementSchema(
    provider=ProviderKind.YAHOO,
    income_path=("incomeStatementHistory", "incomeStatementHistory"),
    cash_flow_path=("cashflowStatementHistory", "cashflowStatements"),
    revenue="totalRevenue",
    operating_income="operatingIncome",
    eps_fields=("dilutedEPS", "basicEPS"),
    net_income="netIncome",
    operating_cash_flow="totalCashFromOperatingActivities",
    capital_expenditures="capitalExpenditures",
    fiscal_date="endDate",
    beta_path=("defaultKeyStatistics", "beta"),
    return_on_equity_path=("financialData", "returnOnEquity"),
    name_paths=(("price", "longName"), ("price", "shortName")),
)

SCHEMAS: Dict[ProviderKind, StatementSchema] = {
    ALPHA_VANTAGE_SCHEMA.provider: ALPHA_VANTAGE_SCHEMA,
    YAHOO_SCHEMA.provider: YAHOO_SCHEMA,
}


def adapt(
    provider: ProviderKind | str,
    payload: Mapping[str, Any],
    *,
    ticker: str = "",
) -> Tuple[Tuple[RawYearlyFinancials, ...], OverviewScalars]:
    """Convert a provider payload into four newest-first years plus overview scalars.

    Raises :class:`InsufficientHistoryError` when either the income statement
    or the cash flow statement has fewer than four annual reports, reporting
    the shorter of the two. Any other malformed numeric field is read as ``0``.
    """

    schema = SCHEMAS[ProviderKind(provider)]
    income = _records(payload, schema.income_path)
    cash_flow = _records(payload, schema.cash_flow_path)

    if min(len(income), len(cash_flow)) < REQUIRED_YEARS:
        if len(income) <= len(cash_flow):
            raise InsufficientHistoryError(ticker, len(income), statement="income statement")
        raise InsufficientHistoryError(ticker, len(cash_flow), statement="cash flow")

    income = income[:REQUIRED_YEARS]
    cash_flow = cash_flow[:REQUIRED_YEARS]
    earnings_series = _earnings_series(income, schema, _reported_eps_by_date(payload, schema))
    years = tuple(
        RawYearlyFinancials(
            total_revenue=to_float(statement.get(schema.revenue)),
            operating_income=to_float(statement.get(schema.operating_income)),
            earnings=earnings,
            operating_cash_flow=to_float(flows.get(schema.operating_cash_flow)),
            capital_expenditures=to_float(flows.get(schema.capital_expenditures)),
            fiscal_year_end=_fiscal_date(statement.get(schema.fiscal_date)),
        )
        for statement, flows, earnings in zip(income, cash_flow, earnings_series)
    )
    return years, adapt_overview(provider, payload)


def adapt_overview(provider: ProviderKind | str, payload: Mapping[str, Any]) -> OverviewScalars:
    schema = SCHEMAS[ProviderKind(provider)]
    beta = to_float(_safe_get(payload, schema.beta_path, default=None))
    return_on_equity = to_float(_safe_get(payload, schema.return_on_equity_path, default=None))
    return OverviewScalars(
        beta=beta or DEFAULT_BETA,
        return_on_equity=return_on_equity or DEFAULT_RETURN_ON_EQUITY,
    )


def company_name(provider: ProviderKind | str, payload: Mapping[str, Any], default: str) -> str:
    schema = SCHEMAS[ProviderKind(provider)]
    for path in schema.name_paths:
        value = _safe_get(payload, path, default=None)
        if isinstance(value, str) and value.strip() and value != "None":
            return value.strip()
    return default


def to_float(value: Any) -> float:
    """Best-effort numeric coercion; anything unusable becomes ``0.0``."""

    number = _parse_float(value)
    return 0.0 if number is None else number


def _parse_float(value: Any) -> Optional[float]:
    if isinstance(value, Mapping):
        # Yahoo wraps numbers as {"raw": 123.0, "fmt": "123"}.
        value = value.get("raw")
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _records(payload: Mapping[str, Any], path: Sequence[str]) -> List[Mapping[str, Any]]:
    node = _safe_get(payload, path, default=None)
    if not isinstance(node, (list, tuple)):
        return []
    return [item for item in node if isinstance(item, Mapping)]


def _earnings_series(
    income: Sequence[Mapping[str, Any]],
    schema: StatementSchema,
    reported_eps: Mapping[str, float],
) -> List[float]:
    """Per-share earnings when every year reports them, otherwise net income for every year."""

    eps = [_eps(statement, schema, reported_eps) for statement in income]
    if all(value is not None for value in eps):
        return [float(value) for value in eps]
    return [to_float(statement.get(schema.net_income)) for statement in income]


def _eps(
    statement: Mapping[str, Any],
    schema: StatementSchema,
    reported_eps: Mapping[str, float],
) -> Optional[float]:
    for field in schema.eps_fields:
        value = _parse_float(statement.get(field))
        if value is not None:
            return value
    return reported_eps.get(_fiscal_date(statement.get(schema.fiscal_date)))


def _reported_eps_by_date(payload: Mapping[str, Any], schema: StatementSchema) -> Dict[str, float]:
    if schema.earnings_path is None:
        return {}
    reported: Dict[str, float] = {}
    for entry in _records(payload, schema.earnings_path):
        fiscal_date = _fiscal_date(entry.get(schema.fiscal_date))
        value = _parse_float(entry.get("reportedEPS"))
        if fiscal_date and value is not None:
            reported[fiscal_date] = value
    return reported


def _fiscal_date(value: Any) -> str:
    if isinstance(value, Mapping):
        value = value.get("fmt") or value.get("raw")
    if value is None:
        return ""
    if hasattr(value, "date") and callable(value.date):
        return value.date().isoformat()
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _safe_get(payload: Mapping[str, Any], keys: Sequence[str], *, default: Any) -> Any:
    node: Any = payload
    for key in keys:
        if not isinstance(node, Mapping) or key not in node:
            return default
        node = node[key]
    return node

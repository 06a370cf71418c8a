from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .adapters import ProviderKind


def _yahoo_value(value: float) -> Dict[str, Any]:
    return {"raw": value, "fmt": f"{value:,.2f}"}


def _alpha_vantage_years(rows: List[Tuple[str, ...]], keys: Tuple[str, ...]) -> List[Dict[str, str]]:
    return [dict(zip(keys, row)) for row in rows]


_AV_INCOME_KEYS = ("fiscalDateEnding", "reportedCurrency", "totalRevenue", "operatingIncome", "netIncome")
_AV_CASH_FLOW_KEYS = ("fiscalDateEnding", "reportedCurrency", "operatingCashflow", "capitalExpenditures")


SAMPLE_ALPHA_VANTAGE: Dict[str, Dict[str, Any]] = {
    # Steady 10% revenue compounding with EPS and free cash flow doubling.
    "ACME": {
        "income_statement": {
            "symbol": "ACME",
            "annualReports": _alpha_vantage_years(
                [
                    ("2023-12-31", "USD", "1331", "200", "150"),
                    ("2022-12-31", "USD", "1210", "170", "120"),
                    ("2021-12-31", "USD", "1100", "130", "95"),
                    ("2020-12-31", "USD", "1000", "100", "70"),
                ],
                _AV_INCOME_KEYS,
            ),
        },
        "cash_flow": {
            "symbol": "ACME",
            "annualReports": _alpha_vantage_years(
                [
                    ("2023-12-31", "USD", "300", "-60"),
                    ("2022-12-31", "USD", "260", "50"),
                    ("2021-12-31", "USD", "200", "-40"),
                    ("2020-12-31", "USD", "150", "30"),
                ],
                _AV_CASH_FLOW_KEYS,
            ),
        },
        "overview": {"Symbol": "ACME", "Name": "Acme Corp", "Beta": "1.2", "ReturnOnEquityTTM": "0.25"},
        "earnings": {
            "symbol": "ACME",
            "annualEarnings": [
                {"fiscalDateEnding": "2023-12-31", "reportedEPS": "2.00"},
                {"fiscalDateEnding": "2022-12-31", "reportedEPS": "1.60"},
                {"fiscalDateEnding": "2021-12-31", "reportedEPS": "1.30"},
                {"fiscalDateEnding": "2020-12-31", "reportedEPS": "1.00"},
            ],
        },
    },
    # Loss-making turnaround with gaps in the filings.
    "PIVOT": {
        "income_statement": {
            "symbol": "PIVOT",
            "annualReports": _alpha_vantage_years(
                [
                    ("2023-12-31", "USD", "900", "90", "-40"),
                    ("2022-12-31", "USD", "None", "None", "-60"),
                    ("2021-12-31", "USD", "700", "20", "-80"),
                    ("2020-12-31", "USD", "600", "-30", "-100"),
                ],
                _AV_INCOME_KEYS,
            ),
        },
        "cash_flow": {
            "symbol": "PIVOT",
            "annualReports": _alpha_vantage_years(
                [
                    ("2023-12-31", "USD", "120", "None"),
                    ("2022-12-31", "USD", "95", "-70"),
                    ("2021-12-31", "USD", "85", "-90"),
                    ("2020-12-31", "USD", "80", "-100"),
                ],
                _AV_CASH_FLOW_KEYS,
            ),
        },
        "overview": {"Symbol": "PIVOT", "Name": "Pivot Labs", "Beta": "None", "ReturnOnEquityTTM": "-0.05"},
    },
    # Recently listed: only three annual reports on file.
    "ROOKIE": {
        "income_statement": {
            "symbol": "ROOKIE",
            "annualReports": _alpha_vantage_years(
                [
                    ("2023-12-31", "USD", "300", "30", "20"),
                    ("2022-12-31", "USD", "200", "15", "10"),
                    ("2021-12-31", "USD", "120", "5", "2"),
                ],
                _AV_INCOME_KEYS,
            ),
        },
        "cash_flow": {
            "symbol": "ROOKIE",
            "annualReports": _alpha_vantage_years(
                [
                    ("2023-12-31", "USD", "40", "-10"),
                    ("2022-12-31", "USD", "25", "-8"),
                    ("2021-12-31", "USD", "10", "-5"),
                ],
                _AV_CASH_FLOW_KEYS,
            ),
        },
        "overview": {"Symbol": "ROOKIE", "Name": "Rookie Inc", "Beta": "1.8", "ReturnOnEquityTTM": "0.08"},
    },
}


def _yahoo_income(end_date: str, revenue: float, operating_income: float, net_income: float) -> Dict[str, Any]:
    return {
        "endDate": {"raw": end_date, "fmt": end_date},
        "totalRevenue": _yahoo_value(revenue),
        "operatingIncome": _yahoo_value(operating_income),
        "netIncome": _yahoo_value(net_income),
    }


def _yahoo_cash_flow(end_date: str, operating: float, capex: float) -> Dict[str, Any]:
    return {
        "endDate": {"raw": end_date, "fmt": end_date},
        "totalCashFromOperatingActivities": _yahoo_value(operating),
        "capitalExpenditures": _yahoo_value(capex),
    }


SAMPLE_YAHOO: Dict[str, Dict[str, Any]] = {
    # Swings from a net loss to a profit; low beta is floored when estimating WACC.
    "GLBX": {
        "incomeStatementHistory": {
            "incomeStatementHistory": [
                _yahoo_income("2023-12-31", 520.0, 78.0, 60.0),
                _yahoo_income("2022-12-31", 480.0, 60.0, 25.0),
                _yahoo_income("2021-12-31", 440.0, 50.0, 5.0),
                _yahoo_income("2020-12-31", 400.0, 40.0, -20.0),
            ]
        },
        "cashflowStatementHistory": {
            "cashflowStatements": [
                _yahoo_cash_flow("2023-12-31", 90.0, -30.0),
                _yahoo_cash_flow("2022-12-31", 75.0, -28.0),
                _yahoo_cash_flow("2021-12-31", 60.0, -25.0),
                _yahoo_cash_flow("2020-12-31", 50.0, -20.0),
            ]
        },
        "defaultKeyStatistics": {"beta": _yahoo_value(0.3)},
        "financialData": {},
        "price": {"longName": "Globex Corporation", "shortName": "Globex"},
    },
}


SAMPLE_PAYLOADS: Dict[ProviderKind, Dict[str, Dict[str, Any]]] = {
    ProviderKind.ALPHA_VANTAGE: SAMPLE_ALPHA_VANTAGE,
    ProviderKind.YAHOO: SAMPLE_YAHOO,
}

from __future__ import annotations

from typing import Optional


class GrowthIndexError(Exception):
    """Base class for errors raised by the growth index engine."""


class InsufficientHistoryError(GrowthIndexError):
    """Raised when fewer than four annual statements are available."""

    def __init__(
        self,
        ticker: str,
        years_available: int,
        *,
        statement: Optional[str] = None,
        required: int = 4,
    ) -> None:
        self.ticker = ticker
        self.years_available = years_available
        self.statement = statement
        self.required = required
        label = f"{statement} " if statement else ""
        subject = f" for {ticker}" if ticker else ""
        super().__init__(
            f"Need {required}yr {label}data{subject}, got {years_available}"
        )

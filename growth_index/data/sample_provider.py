from __future__ import annotations

import copy
from typing import Any, Dict

from .adapters import ProviderKind
from .providers import BaseProvider, DataProviderError
from .sample_data import SAMPLE_PAYLOADS


class SampleProvider(BaseProvider):
    """Offline provider that serves deterministic sample statements."""

    def __init__(self, kind: ProviderKind = ProviderKind.ALPHA_VANTAGE) -> None:
        super().__init__(config=None)
        self.kind = ProviderKind(kind)

    def statements(self, ticker: str) -> Dict[str, Any]:
        payloads = SAMPLE_PAYLOADS[self.kind]
        try:
            return copy.deepcopy(payloads[ticker.upper()])
        except KeyError:
            raise DataProviderError(f"No sample statements for {ticker}") from None

    @property
    def tickers(self) -> list[str]:
        return sorted(SAMPLE_PAYLOADS[self.kind])

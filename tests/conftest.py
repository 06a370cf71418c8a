"""Shared pytest fixtures built from the bundled sample statements."""

from __future__ import annotations

import copy

import pytest

from growth_index.core.metrics import GrowthMetrics
from growth_index.core.scoring_engine import EXAMPLE_COMPANIES
from growth_index.data.adapters import ProviderKind
from growth_index.data.sample_data import SAMPLE_ALPHA_VANTAGE, SAMPLE_YAHOO
from growth_index.data.sample_provider import SampleProvider


@pytest.fixture
def acme_payload() -> dict:
    """Alpha Vantage payload with clean, steadily compounding numbers."""
    return copy.deepcopy(SAMPLE_ALPHA_VANTAGE["ACME"])


@pytest.fixture
def pivot_payload() -> dict:
    """Alpha Vantage payload with losses and ``"None"`` gaps."""
    return copy.deepcopy(SAMPLE_ALPHA_VANTAGE["PIVOT"])


@pytest.fixture
def rookie_payload() -> dict:
    """Alpha Vantage payload with only three years on file."""
    return copy.deepcopy(SAMPLE_ALPHA_VANTAGE["ROOKIE"])


@pytest.fixture
def globex_payload() -> dict:
    """Yahoo quoteSummary-shaped payload with ``{"raw": ...}`` wrappers."""
    return copy.deepcopy(SAMPLE_YAHOO["GLBX"])


@pytest.fixture
def alpha_vantage_source() -> SampleProvider:
    return SampleProvider(ProviderKind.ALPHA_VANTAGE)


@pytest.fixture
def yahoo_source() -> SampleProvider:
    return SampleProvider(ProviderKind.YAHOO)


@pytest.fixture
def meta_metrics() -> GrowthMetrics:
    return EXAMPLE_COMPANIES["META"].metrics

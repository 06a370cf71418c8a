from __future__ import annotations

from typing import Sequence

from .utils import sample_mean_and_stdev
from growth_index.core.metrics import clamp

MIN_CONSISTENCY = 0.5
MAX_CONSISTENCY = 1.0


def consistency_factor(
    annual_growth_rates: Sequence[float],
    *,
    min_cf: float = MIN_CONSISTENCY,
    max_cf: float = MAX_CONSISTENCY,
) -> float:
    """Penalize erratic growth: ``1 - stdev / mean`` clamped to ``[min_cf, max_cf]``.

    A company compounding steadily at 20% keeps the full factor, while one
    alternating between -10% and 50% is pushed towards ``min_cf``.
    """

    if len(annual_growth_rates) < 2:
        return max_cf

    mean, stdev = sample_mean_and_stdev(annual_growth_rates)
    # A coefficient of variation is meaningless around a non-positive mean.
    if mean <= 0:
        return min_cf

    return clamp(1 - stdev / mean, min_cf, max_cf)

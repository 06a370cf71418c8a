from __future__ import annotations

from typing import Dict, Sequence

import numpy as np


def weighted_contributions(values: Dict[str, float], weights: Dict[str, float]) -> Dict[str, float]:
    """Multiply each value by its weight; keys without a weight contribute zero."""

    return {key: values[key] * weights.get(key, 0.0) for key in values}


def sample_mean_and_stdev(values: Sequence[float]) -> tuple[float, float]:
    """Mean and sample standard deviation (``n - 1`` denominator)."""

    series = np.asarray(values, dtype=float)
    if series.size == 0:
        return 0.0, 0.0
    mean = float(series.mean())
    if series.size < 2:
        return mean, 0.0
    return mean, float(series.std(ddof=1))

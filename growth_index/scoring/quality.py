from __future__ import annotations

from growth_index.core.metrics import clamp

MIN_QUALITY = 0.7
MAX_QUALITY = 1.0


def quality_factor(
    roic: float,
    wacc: float,
    *,
    min_qf: float = MIN_QUALITY,
    max_qf: float = MAX_QUALITY,
) -> float:
    """Scale from ``min_qf`` up to ``max_qf`` as ROIC approaches WACC.

    Returns above the cost of capital earn no extra credit and a negative ROIC
    earns no less than ``min_qf``.
    """

    if wacc <= 0:
        return max_qf
    ratio = clamp(roic / wacc, 0.0, 1.0)
    return min_qf + (max_qf - min_qf) * ratio

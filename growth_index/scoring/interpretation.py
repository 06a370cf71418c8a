from __future__ import annotations

from typing import Tuple

from growth_index.core.metrics import Interpretation

# Lower bounds are inclusive; checked from the highest band down.
GROWTH_TIERS: Tuple[Tuple[float, Interpretation], ...] = (
    (
        40.0,
        Interpretation(
            label="Exceptional Growth",
            description="Hypergrowth company with outstanding metrics across all dimensions",
            color="purple",
        ),
    ),
    (
        25.0,
        Interpretation(
            label="Strong Growth",
            description="High-growth company with solid fundamentals and value creation",
            color="green",
        ),
    ),
    (
        15.0,
        Interpretation(
            label="Moderate Growth",
            description="Healthy growth with room for improvement in some areas",
            color="yellow",
        ),
    ),
    (
        5.0,
        Interpretation(
            label="Low Growth",
            description="Mature company with stable but limited growth prospects",
            color="orange",
        ),
    ),
)

DECLINING = Interpretation(
    label="Declining/Stagnant",
    description="Company facing headwinds or in a declining phase",
    color="red",
)


def interpret_growth_index(growth_index: float) -> Interpretation:
    """Map a growth index score to its descriptive tier."""

    for lower_bound, tier in GROWTH_TIERS:
        if growth_index >= lower_bound:
            return tier
    return DECLINING

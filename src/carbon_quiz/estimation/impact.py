"""Coarse impact classification of annual totals."""

from __future__ import annotations

import math
from enum import Enum
from typing import Final

__all__ = ["IMPACT_THRESHOLDS", "ImpactLevel", "classify_impact"]


class ImpactLevel(str, Enum):
    """Four-tier classification of annual emissions."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very-high"


# Exclusive upper bounds in kg CO2/year.
IMPACT_THRESHOLDS: Final[tuple[tuple[float, ImpactLevel], ...]] = (
    (3000, ImpactLevel.LOW),
    (5000, ImpactLevel.MEDIUM),
    (8000, ImpactLevel.HIGH),
)


def classify_impact(total: float) -> ImpactLevel:
    """Classify an annual total in kg CO2.

    Raises:
        ValueError: If ``total`` is negative or not finite.
    """

    if isinstance(total, bool) or not math.isfinite(total) or total < 0:
        raise ValueError("total must be a non-negative finite number")
    for upper, level in IMPACT_THRESHOLDS:
        if total < upper:
            return level
    return ImpactLevel.VERY_HIGH

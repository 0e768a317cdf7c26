"""Footprint estimation package.

Provides the pure core functions (:func:`compute_footprint`,
:func:`classify_impact`, :func:`suggest`) and the :class:`FootprintEstimator`
facade that bundles them.
"""

from __future__ import annotations

from .calculator import compute_footprint
from .estimator import FootprintEstimator, FootprintReport
from .factors import EMISSION_FACTORS, load_emission_factors
from .impact import ImpactLevel, classify_impact
from .suggestions import MAX_SUGGESTIONS, dominant_category, suggest

__all__ = [
    "EMISSION_FACTORS",
    "MAX_SUGGESTIONS",
    "FootprintEstimator",
    "FootprintReport",
    "ImpactLevel",
    "classify_impact",
    "compute_footprint",
    "dominant_category",
    "load_emission_factors",
    "suggest",
]

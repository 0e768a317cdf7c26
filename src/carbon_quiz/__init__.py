"""Carbon Quiz - annual carbon footprint estimation from lifestyle answers."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "CarbonResult",
    "CredentialStore",
    "FootprintEstimator",
    "GeminiInsightClient",
    "ImpactLevel",
    "InvalidAnswersError",
    "QuizAnswers",
    "classify_impact",
    "compute_footprint",
    "suggest",
]

if TYPE_CHECKING:
    from .carbon_models import CarbonResult
    from .errors import InvalidAnswersError
    from .estimation import (
        FootprintEstimator,
        ImpactLevel,
        classify_impact,
        compute_footprint,
        suggest,
    )
    from .insight import GeminiInsightClient
    from .key_store import CredentialStore
    from .schemas import QuizAnswers


def __getattr__(name: str) -> Any:
    """Lazily import submodules so the HTTP stack loads only when needed."""

    module_map = {
        "CarbonResult": "carbon_models",
        "CredentialStore": "key_store",
        "FootprintEstimator": "estimation",
        "GeminiInsightClient": "insight",
        "ImpactLevel": "estimation",
        "InvalidAnswersError": "errors",
        "QuizAnswers": "schemas",
        "classify_impact": "estimation",
        "compute_footprint": "estimation",
        "suggest": "estimation",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)

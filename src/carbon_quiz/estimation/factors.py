"""Emission-factor table for footprint estimation.

The table maps a category name to a mapping of answer values to factors.
Per-activity factors are in kg CO2 (per km for ``car``, per year for the
others); the ``*_modifier`` categories hold dimensionless multipliers.
The table is read-only and loaded once per process; an override JSON file
may be supplied via ``CARBON_QUIZ_FACTORS_FILE``.
"""

from __future__ import annotations

import json
import logging
import math
import pathlib
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Final

from carbon_quiz.errors import FactorTableError
from carbon_quiz.settings import get_settings

LOGGER = logging.getLogger(__name__)

__all__ = [
    "EMISSION_FACTORS",
    "FactorTable",
    "WEEKS_PER_YEAR",
    "freeze_factor_table",
    "load_emission_factors",
]

FactorTable = Mapping[str, Mapping[str, float]]

WEEKS_PER_YEAR: Final[int] = 52

_DEFAULT_FACTORS: Final[dict[str, dict[str, float]]] = {
    "car": {
        "none": 0.0,
        "electric": 0.05,  # grid electricity
        "hybrid": 0.1,
        "petrol": 0.21,
        "diesel": 0.27,
    },
    "flights": {
        "none": 0.0,
        "1-2": 1100.0,  # short-haul average
        "3-5": 3300.0,
        "6+": 6600.0,
    },
    "public_transport": {
        "daily": 400.0,
        "weekly": 150.0,
        "rarely": 50.0,
        "never": 0.0,
    },
    "home": {
        "small": 1500.0,
        "medium": 2500.0,
        "large": 4000.0,
    },
    "diet": {
        "vegan": 1500.0,
        "vegetarian": 1700.0,
        "flexitarian": 2200.0,
        "meat-regular": 2800.0,
        "meat-heavy": 3500.0,
    },
    "renewable_modifier": {
        "true": 0.3,
        "false": 1.0,
    },
    "efficiency_modifier": {
        "high": 0.7,
        "medium": 1.0,
        "low": 1.3,
    },
    "local_food_modifier": {
        "mostly": 0.85,
        "sometimes": 1.0,
        "rarely": 1.15,
    },
    "food_waste_modifier": {
        "minimal": 0.9,
        "some": 1.0,
        "significant": 1.2,
    },
}


def freeze_factor_table(raw: Mapping[str, Mapping[str, float]]) -> FactorTable:
    """Return a read-only deep copy of ``raw``."""

    return MappingProxyType(
        {
            category: MappingProxyType({key: float(value) for key, value in values.items()})
            for category, values in raw.items()
        }
    )


EMISSION_FACTORS: Final[FactorTable] = freeze_factor_table(_DEFAULT_FACTORS)


@lru_cache(maxsize=1)
def load_emission_factors() -> FactorTable:
    """Load the emission-factor table.

    Returns:
        The packaged table, or the validated override named by
        ``CARBON_QUIZ_FACTORS_FILE`` when that variable is set.

    Raises:
        FactorTableError: Raised when the override file is missing, is not
            valid JSON, or does not cover every category and answer value
            with a non-negative finite number.
    """

    settings = get_settings()
    override_path = settings.factors_file
    if not override_path:
        return EMISSION_FACTORS

    path = pathlib.Path(override_path)
    if not path.exists():
        raise FactorTableError(f"CARBON_QUIZ_FACTORS_FILE not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise FactorTableError("Failed to parse emission factor override JSON") from exc

    table = _validate_override(data)
    LOGGER.info("Loaded emission factor override", extra={"path": str(path)})
    return table


def _validate_override(data: object) -> FactorTable:
    """Check an override payload against the packaged table's shape."""

    if not isinstance(data, dict):
        raise FactorTableError("Emission factor override must be a JSON object")

    parsed: dict[str, dict[str, float]] = {}
    for category, defaults in _DEFAULT_FACTORS.items():
        section = data.get(category)
        if not isinstance(section, dict):
            raise FactorTableError(f"Missing factor category: {category}")
        values: dict[str, float] = {}
        for key in defaults:
            raw_value = section.get(key)
            if isinstance(raw_value, bool) or not isinstance(raw_value, (int, float)):
                raise FactorTableError(f"Factor {category}.{key} must be a number")
            value = float(raw_value)
            if not math.isfinite(value) or value < 0:
                raise FactorTableError(
                    f"Factor {category}.{key} must be non-negative and finite"
                )
            values[key] = value
        parsed[category] = values

    unknown = sorted(set(data) - set(_DEFAULT_FACTORS))
    if unknown:
        LOGGER.warning(
            "Ignoring unknown factor categories", extra={"categories": unknown}
        )
    return freeze_factor_table(parsed)

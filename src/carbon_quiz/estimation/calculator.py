"""Annual footprint calculation from questionnaire answers."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Final

from carbon_quiz.carbon_models import BreakdownEntry, CarbonResult, Comparison
from carbon_quiz.estimation.factors import (
    WEEKS_PER_YEAR,
    FactorTable,
    load_emission_factors,
)
from carbon_quiz.schemas import QuizAnswers, parse_answers

LOGGER = logging.getLogger(__name__)

__all__ = [
    "CATEGORY_COLORS",
    "compute_footprint",
    "electricity_emissions",
    "food_emissions",
    "percentage_of",
    "round_half_up",
    "transport_emissions",
]

CATEGORY_COLORS: Final[dict[str, str]] = {
    "Transport": "hsl(195, 70%, 50%)",
    "Electricity": "hsl(35, 40%, 35%)",
    "Food": "hsl(142, 60%, 45%)",
}


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves upwards.

    Raises:
        ValueError: If ``value`` is not finite.
    """

    if not math.isfinite(value):
        raise ValueError(f"Emission total is not finite: {value!r}")
    return int(math.floor(value + 0.5))


def transport_emissions(answers: QuizAnswers, factors: FactorTable) -> int:
    """Return annual transport emissions in kg CO2."""

    car = (
        factors["car"][answers.car_type.value]
        * answers.car_km_per_week
        * WEEKS_PER_YEAR
    )
    flights = factors["flights"][answers.flights_per_year.value]
    public = factors["public_transport"][answers.public_transport.value]
    return round_half_up(car + flights + public)


def electricity_emissions(answers: QuizAnswers, factors: FactorTable) -> int:
    """Return annual household electricity emissions in kg CO2.

    The renewable multiplier is applied before the efficiency multiplier.
    """

    value = factors["home"][answers.home_size.value]
    value *= factors["renewable_modifier"][str(answers.renewable_energy).lower()]
    value *= factors["efficiency_modifier"][answers.energy_efficiency.value]
    return round_half_up(value)


def food_emissions(answers: QuizAnswers, factors: FactorTable) -> int:
    """Return annual food emissions in kg CO2.

    The local-food multiplier is applied before the food-waste multiplier.
    """

    value = factors["diet"][answers.diet.value]
    value *= factors["local_food_modifier"][answers.local_food.value]
    value *= factors["food_waste_modifier"][answers.food_waste.value]
    return round_half_up(value)


def percentage_of(value: int, total: int) -> int:
    """Return ``value`` as a rounded percentage of ``total`` (0 when total is 0)."""

    if total <= 0:
        return 0
    return round_half_up(value / total * 100)


def compute_footprint(
    answers: QuizAnswers | Mapping[str, object],
    *,
    factors: FactorTable | None = None,
) -> CarbonResult:
    """Estimate the annual carbon footprint for a set of answers.

    Args:
        answers: Validated answers, or a raw mapping that is validated first.
        factors: Optional factor table; defaults to
            :func:`~carbon_quiz.estimation.factors.load_emission_factors`.

    Returns:
        The per-category and total emissions with the percentage breakdown.

    Raises:
        InvalidAnswersError: If ``answers`` is a mapping that fails validation.
    """

    parsed = parse_answers(answers)
    table = factors if factors is not None else load_emission_factors()

    transport = transport_emissions(parsed, table)
    electricity = electricity_emissions(parsed, table)
    food = food_emissions(parsed, table)
    total = transport + electricity + food

    breakdown = (
        _entry("Transport", transport, total),
        _entry("Electricity", electricity, total),
        _entry("Food", food, total),
    )

    LOGGER.debug(
        "Footprint computed",
        extra={
            "transport_kg": transport,
            "electricity_kg": electricity,
            "food_kg": food,
            "total_kg": total,
        },
    )

    return CarbonResult(
        transport=transport,
        electricity=electricity,
        food=food,
        total=total,
        breakdown=breakdown,
        comparison=Comparison(),
    )


def _entry(category: str, value: int, total: int) -> BreakdownEntry:
    return BreakdownEntry(
        category=category,
        value=value,
        percentage=percentage_of(value, total),
        color=CATEGORY_COLORS[category],
    )

"""Rule-based reduction suggestions for the dominant category."""

from __future__ import annotations

from typing import Final

from carbon_quiz.carbon_models import BreakdownEntry, CarbonResult
from carbon_quiz.schemas import CarType, Diet, FlightFrequency, LocalFood, QuizAnswers

__all__ = ["MAX_SUGGESTIONS", "dominant_category", "suggest"]

MAX_SUGGESTIONS: Final[int] = 5


def dominant_category(result: CarbonResult) -> BreakdownEntry:
    """Return the largest breakdown entry; ties keep the earlier entry."""

    biggest = result.breakdown[0]
    for item in result.breakdown[1:]:
        if item.value > biggest.value:
            biggest = item
    return biggest


def _transport(answers: QuizAnswers) -> list[str]:
    tips: list[str] = []
    if answers.car_type in (CarType.PETROL, CarType.DIESEL):
        tips.append("Consider switching to an electric or hybrid vehicle")
    if answers.flights_per_year is not FlightFrequency.NONE:
        tips.append("Try video calls instead of business flights when possible")
    tips.append("Use public transport or cycle for short trips")
    return tips


def _electricity(answers: QuizAnswers) -> list[str]:
    tips: list[str] = []
    if not answers.renewable_energy:
        tips.append("Switch to a renewable energy provider")
    tips.append("Upgrade to LED lighting and energy-efficient appliances")
    tips.append("Improve home insulation to reduce heating/cooling needs")
    return tips


def _food(answers: QuizAnswers) -> list[str]:
    tips: list[str] = []
    if answers.diet in (Diet.MEAT_HEAVY, Diet.MEAT_REGULAR):
        tips.append("Try having meat-free days each week")
    if answers.local_food is not LocalFood.MOSTLY:
        tips.append("Buy more locally sourced and seasonal produce")
    tips.append("Plan meals to reduce food waste")
    return tips


_RULES = {
    "Transport": _transport,
    "Electricity": _electricity,
    "Food": _food,
}


def suggest(answers: QuizAnswers, result: CarbonResult) -> list[str]:
    """Return up to :data:`MAX_SUGGESTIONS` tips for the dominant category.

    Only answers belonging to the dominant category are consulted.
    """

    rule = _RULES[dominant_category(result).category]
    return rule(answers)[:MAX_SUGGESTIONS]

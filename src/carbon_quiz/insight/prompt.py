"""Prompt construction for AI-generated footprint explanations."""

from __future__ import annotations

from carbon_quiz.carbon_models import CarbonResult
from carbon_quiz.estimation.impact import ImpactLevel

__all__ = ["build_prompt", "build_request_body"]


def build_prompt(result: CarbonResult, impact_level: ImpactLevel) -> str:
    """Return the explanation prompt for ``result``."""

    transport, electricity, food = result.breakdown
    level = ImpactLevel(impact_level).value
    return (
        "You are an environmental expert. A user has completed a carbon "
        "footprint quiz. Their results:\n"
        f"- Total annual CO₂: {result.total} kg\n"
        f"- Transport: {result.transport} kg ({transport.percentage}%)\n"
        f"- Electricity: {result.electricity} kg ({electricity.percentage}%)\n"
        f"- Food: {result.food} kg ({food.percentage}%)\n"
        "\n"
        f"The global average is {result.comparison.global_average} kg/year. "
        f'Their impact level is "{level}".\n'
        "\n"
        "Write a friendly, encouraging 2-3 paragraph explanation of their "
        "results. Mention their biggest impact area and give 2-3 specific, "
        "actionable tips to reduce their footprint. Keep it conversational and "
        "positive, not preachy. Use emojis sparingly."
    )


def build_request_body(prompt: str) -> dict[str, object]:
    """Wrap ``prompt`` in a ``generateContent`` request body."""

    return {"contents": [{"parts": [{"text": prompt}]}]}

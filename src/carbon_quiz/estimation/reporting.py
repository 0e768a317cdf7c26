"""Reporting helpers separate from core estimation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from carbon_quiz.carbon_models import CarbonResult
from carbon_quiz.estimation.impact import ImpactLevel

if TYPE_CHECKING:
    from carbon_quiz.estimation.estimator import FootprintReport

__all__ = [
    "ComparisonBar",
    "comparison_bars",
    "impact_label",
    "render_text_report",
]

_IMPACT_LABELS = {
    ImpactLevel.LOW: "Low Impact",
    ImpactLevel.MEDIUM: "Moderate Impact",
    ImpactLevel.HIGH: "High Impact",
    ImpactLevel.VERY_HIGH: "Very High Impact",
}

NO_EXPLANATION = "No AI explanation available."


@dataclass(frozen=True, slots=True)
class ComparisonBar:
    """A single bar in the footprint comparison chart."""

    label: str
    value: int
    width_pct: float
    highlight: bool = False


def impact_label(level: ImpactLevel) -> str:
    """Return the display label for an impact level."""

    return _IMPACT_LABELS[ImpactLevel(level)]


def comparison_bars(result: CarbonResult, scale: float = 10_000) -> list[ComparisonBar]:
    """Compare the user's total with the global average and the 2030 target.

    Bar widths are percentages of ``scale``, capped at 100.
    """

    if scale <= 0:
        raise ValueError("scale must be positive")
    rows = (
        ("Your footprint", result.total, True),
        ("Global average", result.comparison.global_average, False),
        ("2030 target", result.comparison.target_2030, False),
    )
    return [
        ComparisonBar(
            label=label,
            value=value,
            width_pct=min(value / scale * 100, 100.0),
            highlight=highlight,
        )
        for label, value, highlight in rows
    ]


def render_text_report(report: "FootprintReport") -> str:
    """Render a report as plain text for terminal output."""

    result = report.result
    lines = [
        f"Your annual carbon footprint: {result.total:,} kg CO2",
        f"Impact level: {impact_label(report.impact_level)}",
        "",
        "Breakdown:",
    ]
    for item in result.breakdown:
        lines.append(f"  {item.category}: {item.value:,} kg CO2 ({item.percentage}%)")

    lines.extend(["", "Comparison:"])
    for bar in comparison_bars(result):
        lines.append(f"  {bar.label}: {bar.value:,} kg")

    lines.extend(["", "Suggestions:"])
    if report.suggestions:
        lines.extend(f"  - {tip}" for tip in report.suggestions)
    else:
        lines.append("  (none)")

    lines.extend(["", "AI insight:"])
    lines.append(report.explanation.strip() if report.explanation else NO_EXPLANATION)
    return "\n".join(lines)

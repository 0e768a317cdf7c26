"""High-level footprint estimation orchestration."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from carbon_quiz.carbon_models import CarbonResult
from carbon_quiz.estimation.calculator import compute_footprint
from carbon_quiz.estimation.factors import FactorTable
from carbon_quiz.estimation.impact import ImpactLevel, classify_impact
from carbon_quiz.estimation.suggestions import suggest
from carbon_quiz.schemas import QuizAnswers, parse_answers

if TYPE_CHECKING:
    from carbon_quiz.insight import GeminiInsightClient


@dataclass(frozen=True)
class FootprintReport:
    """Everything the results view shows for one completed quiz."""

    answers: QuizAnswers
    result: CarbonResult
    impact_level: ImpactLevel
    suggestions: tuple[str, ...] = field(default_factory=tuple)
    explanation: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-ready representation."""

        return {
            "answers": self.answers.to_payload(),
            "result": self.result.to_dict(),
            "impactLevel": self.impact_level.value,
            "suggestions": list(self.suggestions),
            "explanation": self.explanation,
        }


class FootprintEstimator:
    """Estimate footprints and optionally enrich them with an AI explanation.

    The estimator is stateless apart from its collaborators; enrichment never
    alters the computed result and never raises.
    """

    def __init__(
        self,
        *,
        insight_client: "GeminiInsightClient | None" = None,
        factors: FactorTable | None = None,
    ) -> None:
        """Initialise the estimator.

        Args:
            insight_client: Optional client used by :meth:`explain` and
                :meth:`aexplain`. Without one, explanations are always ``None``.
            factors: Optional factor table overriding the packaged defaults.
        """

        self.logger = logging.getLogger("carbon_quiz.estimator")
        self.insight_client = insight_client
        self._factors = factors

    def estimate(self, answers: QuizAnswers | Mapping[str, object]) -> FootprintReport:
        """Compute result, impact level and suggestions for ``answers``.

        Raises:
            InvalidAnswersError: If the answers fail validation.
        """

        parsed = parse_answers(answers)
        result = compute_footprint(parsed, factors=self._factors)
        level = classify_impact(result.total)
        tips = tuple(suggest(parsed, result))
        self.logger.info(
            "Footprint estimated",
            extra={"total_kg": result.total, "impact_level": level.value},
        )
        return FootprintReport(
            answers=parsed,
            result=result,
            impact_level=level,
            suggestions=tips,
        )

    def explain(self, report: FootprintReport) -> FootprintReport:
        """Return a copy of ``report`` carrying an explanation when available."""

        if self.insight_client is None:
            return report
        text = self.insight_client.explain(report.result, report.impact_level)
        return replace(report, explanation=text)

    async def aexplain(self, report: FootprintReport) -> FootprintReport:
        """Asynchronous variant of :meth:`explain`."""

        if self.insight_client is None:
            return report
        text = await self.insight_client.aexplain(report.result, report.impact_level)
        return replace(report, explanation=text)

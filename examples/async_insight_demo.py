"""Example script estimating a footprint and fetching an AI insight asynchronously."""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Optional

from carbon_quiz.estimation import FootprintEstimator
from carbon_quiz.estimation.reporting import render_text_report
from carbon_quiz.insight import GeminiInsightClient
from carbon_quiz.schemas import QuizAnswers


async def _run(estimator: FootprintEstimator, answers: QuizAnswers, deadline: float):
    report = estimator.estimate(answers)
    try:
        return await asyncio.wait_for(estimator.aexplain(report), timeout=deadline)
    except asyncio.TimeoutError:
        return report


def main(argv: Optional[list[str]] = None) -> int:
    """Demonstrate best-effort asynchronous enrichment."""
    parser = argparse.ArgumentParser(
        description=(
            "Estimate the default questionnaire answers and request a Gemini "
            "explanation without letting it block the result."
        )
    )
    parser.add_argument("--api-key", help="Gemini API key (optional)")
    parser.add_argument("--deadline", type=float, default=10.0)
    parser.add_argument("--json", action="store_true")
    args = parser.parse_args(argv)

    estimator = FootprintEstimator(
        insight_client=GeminiInsightClient(api_key=args.api_key)
    )
    report = asyncio.run(_run(estimator, QuizAnswers.defaults(), args.deadline))

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(render_text_report(report))
    return 0


if __name__ == "__main__":  # pragma: no cover - example entry point
    raise SystemExit(main())

"""Export the carbon-quiz answers JSON Schema."""

from __future__ import annotations

import json
from pathlib import Path

from carbon_quiz.schemas import QuizAnswers


def main() -> None:
    """Write the JSON Schema for :class:`QuizAnswers` to the repository root."""

    schema = QuizAnswers.model_json_schema(by_alias=True)
    output_path = Path(__file__).resolve().parent.parent / "quiz_answers_schema.json"
    output_path.write_text(json.dumps(schema, indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()

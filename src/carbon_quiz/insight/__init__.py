"""Optional AI explanations of footprint results."""

from __future__ import annotations

from carbon_quiz.insight.client import GeminiInsightClient, extract_text
from carbon_quiz.insight.prompt import build_prompt, build_request_body

__all__ = [
    "GeminiInsightClient",
    "build_prompt",
    "build_request_body",
    "extract_text",
]

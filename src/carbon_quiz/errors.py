"""Exception hierarchy for :mod:`carbon_quiz`."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

__all__ = ["CarbonQuizError", "FactorTableError", "InvalidAnswersError"]


class CarbonQuizError(Exception):
    """Base class for all carbon-quiz errors."""


class InvalidAnswersError(CarbonQuizError, ValueError):
    """Raised when questionnaire answers fail validation.

    Attributes:
        errors: Structured error entries as reported by pydantic. Each entry
            carries at least ``loc`` and ``msg`` keys.
    """

    def __init__(self, errors: Sequence[dict[str, Any]]) -> None:
        self.errors: list[dict[str, Any]] = [dict(item) for item in errors]
        super().__init__(self._summarise(self.errors))

    @property
    def fields(self) -> list[str]:
        """Return the names of the offending fields in report order."""

        names: list[str] = []
        for item in self.errors:
            loc = item.get("loc") or ()
            name = ".".join(str(part) for part in loc) or "<root>"
            if name not in names:
                names.append(name)
        return names

    @staticmethod
    def _summarise(errors: Sequence[dict[str, Any]]) -> str:
        if not errors:
            return "Invalid quiz answers"
        parts = []
        for item in errors:
            loc = ".".join(str(part) for part in item.get("loc") or ()) or "<root>"
            parts.append(f"{loc}: {item.get('msg', 'invalid value')}")
        return "Invalid quiz answers: " + "; ".join(parts)


class FactorTableError(CarbonQuizError):
    """Raised when an emission-factor override file is malformed."""

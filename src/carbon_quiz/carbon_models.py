"""Result data models for the carbon-quiz toolkit.

:class:`CarbonResult` is the canonical output of
:func:`carbon_quiz.estimation.compute_footprint`. Use
:meth:`CarbonResult.to_dict` for the camelCase JSON shape consumed by
front ends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, TypedDict

GLOBAL_AVERAGE_KG: Final[int] = 4700
COUNTRY_AVERAGE_KG: Final[int] = 7500
TARGET_2030_KG: Final[int] = 2000


class BreakdownEntryDict(TypedDict):
    """Serialised breakdown entry."""

    category: str
    value: int
    percentage: int
    color: str


class ComparisonDict(TypedDict):
    """Serialised reference figures."""

    globalAverage: int
    countryAverage: int
    target2030: int


class CarbonResultDict(TypedDict):
    """Serialised footprint result."""

    transport: int
    electricity: int
    food: int
    total: int
    breakdown: list[BreakdownEntryDict]
    comparison: ComparisonDict


@dataclass(frozen=True, slots=True)
class BreakdownEntry:
    """One category's share of the total footprint."""

    category: str
    value: int
    percentage: int
    color: str

    def to_dict(self) -> BreakdownEntryDict:
        return {
            "category": self.category,
            "value": self.value,
            "percentage": self.percentage,
            "color": self.color,
        }


@dataclass(frozen=True, slots=True)
class Comparison:
    """Static reference figures in kg CO2 per year."""

    global_average: int = GLOBAL_AVERAGE_KG
    country_average: int = COUNTRY_AVERAGE_KG
    target_2030: int = TARGET_2030_KG

    def to_dict(self) -> ComparisonDict:
        return {
            "globalAverage": self.global_average,
            "countryAverage": self.country_average,
            "target2030": self.target_2030,
        }


@dataclass(frozen=True, slots=True)
class CarbonResult:
    """Annual footprint in kg CO2, split by category.

    ``breakdown`` always holds exactly three entries in the order Transport,
    Electricity, Food.
    """

    transport: int
    electricity: int
    food: int
    total: int
    breakdown: tuple[BreakdownEntry, BreakdownEntry, BreakdownEntry]
    comparison: Comparison = field(default_factory=Comparison)

    def entry(self, category: str) -> BreakdownEntry:
        """Return the breakdown entry for ``category`` (case-insensitive)."""

        wanted = category.lower()
        for item in self.breakdown:
            if item.category.lower() == wanted:
                return item
        raise KeyError(category)

    def to_dict(self) -> CarbonResultDict:
        """Return the camelCase mapping expected by JSON consumers."""

        return {
            "transport": self.transport,
            "electricity": self.electricity,
            "food": self.food,
            "total": self.total,
            "breakdown": [item.to_dict() for item in self.breakdown],
            "comparison": self.comparison.to_dict(),
        }

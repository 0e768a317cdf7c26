"""Pydantic models describing the questionnaire input."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    field_validator,
)

from carbon_quiz.errors import InvalidAnswersError

__all__ = [
    "CarType",
    "Diet",
    "EnergyEfficiency",
    "FlightFrequency",
    "FoodWaste",
    "HomeSize",
    "LocalFood",
    "MAX_CAR_KM_PER_WEEK",
    "PublicTransportUse",
    "QuizAnswers",
    "parse_answers",
]


# A week of driving around the clock at motorway speed stays below this.
MAX_CAR_KM_PER_WEEK = 25_000.0


class CarType(str, Enum):
    """Kind of car the respondent drives."""

    NONE = "none"
    ELECTRIC = "electric"
    HYBRID = "hybrid"
    PETROL = "petrol"
    DIESEL = "diesel"


class FlightFrequency(str, Enum):
    """Number of flights taken per year."""

    NONE = "none"
    ONE_TO_TWO = "1-2"
    THREE_TO_FIVE = "3-5"
    SIX_PLUS = "6+"


class PublicTransportUse(str, Enum):
    """How often public transport is used."""

    DAILY = "daily"
    WEEKLY = "weekly"
    RARELY = "rarely"
    NEVER = "never"


class HomeSize(str, Enum):
    """Home floor area band (small < 50m², medium 50-120m², large > 120m²)."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class EnergyEfficiency(str, Enum):
    """Energy efficiency of the home's appliances and lighting."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Diet(str, Enum):
    """Dietary pattern."""

    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"
    FLEXITARIAN = "flexitarian"
    MEAT_REGULAR = "meat-regular"
    MEAT_HEAVY = "meat-heavy"


class LocalFood(str, Enum):
    """How much of the food bought is locally sourced."""

    MOSTLY = "mostly"
    SOMETIMES = "sometimes"
    RARELY = "rarely"


class FoodWaste(str, Enum):
    """How much food ends up wasted."""

    MINIMAL = "minimal"
    SOME = "some"
    SIGNIFICANT = "significant"


class QuizAnswers(BaseModel):
    """Immutable, validated set of questionnaire answers.

    Field names follow Python conventions; the camelCase names used by the
    questionnaire payloads (``carType``, ``carKmPerWeek`` ...) are accepted as
    aliases.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    car_type: CarType = Field(..., alias="carType")
    car_km_per_week: float = Field(
        ...,
        alias="carKmPerWeek",
        ge=0.0,
        le=MAX_CAR_KM_PER_WEEK,
        allow_inf_nan=False,
        description="Kilometres driven per week.",
    )
    flights_per_year: FlightFrequency = Field(..., alias="flightsPerYear")
    public_transport: PublicTransportUse = Field(..., alias="publicTransport")

    home_size: HomeSize = Field(..., alias="homeSize")
    renewable_energy: StrictBool = Field(..., alias="renewableEnergy")
    energy_efficiency: EnergyEfficiency = Field(..., alias="energyEfficiency")

    diet: Diet
    local_food: LocalFood = Field(..., alias="localFood")
    food_waste: FoodWaste = Field(..., alias="foodWaste")

    @field_validator("car_km_per_week", mode="before")
    @classmethod
    def _reject_bool_distance(cls, value: object) -> object:
        """Refuse JSON booleans, which would otherwise coerce to 0 or 1 km."""

        if isinstance(value, bool):
            raise ValueError("carKmPerWeek must be a number, not a boolean")
        return value

    @classmethod
    def defaults(cls) -> QuizAnswers:
        """Return the answers pre-selected when the questionnaire starts."""

        return cls(
            car_type=CarType.PETROL,
            car_km_per_week=100.0,
            flights_per_year=FlightFrequency.ONE_TO_TWO,
            public_transport=PublicTransportUse.WEEKLY,
            home_size=HomeSize.MEDIUM,
            renewable_energy=False,
            energy_efficiency=EnergyEfficiency.MEDIUM,
            diet=Diet.FLEXITARIAN,
            local_food=LocalFood.SOMETIMES,
            food_waste=FoodWaste.SOME,
        )

    def to_payload(self) -> dict[str, object]:
        """Return a JSON-ready mapping keyed by the camelCase aliases."""

        return self.model_dump(mode="json", by_alias=True)


def parse_answers(data: QuizAnswers | Mapping[str, object]) -> QuizAnswers:
    """Validate raw answers into a :class:`QuizAnswers` instance.

    Args:
        data: Either an existing :class:`QuizAnswers` (returned unchanged) or a
            mapping keyed by field names or their camelCase aliases.

    Returns:
        The validated answers.

    Raises:
        InvalidAnswersError: If any field is missing, unknown or outside its
            declared domain.
    """

    if isinstance(data, QuizAnswers):
        return data
    if not isinstance(data, Mapping):
        raise InvalidAnswersError(
            [{"loc": (), "msg": f"expected a mapping, got {type(data).__name__}"}]
        )
    try:
        return QuizAnswers.model_validate(dict(data))
    except ValidationError as exc:
        raise InvalidAnswersError(
            exc.errors(include_url=False, include_context=False)
        ) from exc

"""Tests for questionnaire answer validation."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from carbon_quiz.errors import CarbonQuizError, InvalidAnswersError
from carbon_quiz.schemas import (
    MAX_CAR_KM_PER_WEEK,
    CarType,
    Diet,
    FlightFrequency,
    QuizAnswers,
    parse_answers,
)


def test_aliases_and_field_names_are_equivalent(answers_payload):
    by_alias = parse_answers(answers_payload)
    by_name = QuizAnswers(
        car_type="diesel",
        car_km_per_week=250,
        flights_per_year="3-5",
        public_transport="rarely",
        home_size="large",
        renewable_energy=False,
        energy_efficiency="low",
        diet="meat-heavy",
        local_food="rarely",
        food_waste="significant",
    )

    assert by_alias == by_name
    assert by_alias.car_type is CarType.DIESEL
    assert by_alias.flights_per_year is FlightFrequency.THREE_TO_FIVE
    assert by_alias.diet is Diet.MEAT_HEAVY


def test_parse_answers_returns_existing_instance(typical_answers):
    assert parse_answers(typical_answers) is typical_answers


def test_answers_are_immutable(typical_answers):
    with pytest.raises(ValidationError):
        typical_answers.car_type = CarType.DIESEL  # type: ignore[misc]


def test_defaults_match_questionnaire():
    defaults = QuizAnswers.defaults()

    assert defaults.to_payload() == {
        "carType": "petrol",
        "carKmPerWeek": 100.0,
        "flightsPerYear": "1-2",
        "publicTransport": "weekly",
        "homeSize": "medium",
        "renewableEnergy": False,
        "energyEfficiency": "medium",
        "diet": "flexitarian",
        "localFood": "sometimes",
        "foodWaste": "some",
    }


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("carType", "rocket"),
        ("flightsPerYear", "10+"),
        ("publicTransport", "hourly"),
        ("homeSize", "huge"),
        ("energyEfficiency", "excellent"),
        ("diet", "carnivore"),
        ("localFood", "always"),
        ("foodWaste", "none"),
        ("renewableEnergy", "yes"),
        ("carKmPerWeek", -1),
        ("carKmPerWeek", math.nan),
        ("carKmPerWeek", math.inf),
        ("carKmPerWeek", "far"),
        ("carKmPerWeek", 1e308),
        ("carKmPerWeek", MAX_CAR_KM_PER_WEEK + 1),
        ("carKmPerWeek", True),
        ("carKmPerWeek", False),
    ],
)
def test_invalid_values_rejected(answers_payload, field, value):
    answers_payload[field] = value

    with pytest.raises(InvalidAnswersError) as excinfo:
        parse_answers(answers_payload)

    assert excinfo.value.fields == [field]
    assert field in str(excinfo.value)


def test_missing_field_rejected(answers_payload):
    del answers_payload["diet"]

    with pytest.raises(InvalidAnswersError) as excinfo:
        parse_answers(answers_payload)

    assert excinfo.value.fields == ["diet"]


def test_unknown_field_rejected(answers_payload):
    answers_payload["petCount"] = 3

    with pytest.raises(InvalidAnswersError, match="petCount"):
        parse_answers(answers_payload)


def test_non_mapping_rejected():
    with pytest.raises(InvalidAnswersError, match="expected a mapping"):
        parse_answers(["petrol"])  # type: ignore[arg-type]


def test_error_hierarchy():
    err = InvalidAnswersError([{"loc": ("diet",), "msg": "bad"}])

    assert isinstance(err, CarbonQuizError)
    assert isinstance(err, ValueError)
    assert str(err) == "Invalid quiz answers: diet: bad"


def test_distance_upper_bound_is_inclusive(answers_payload):
    answers_payload["carKmPerWeek"] = MAX_CAR_KM_PER_WEEK

    assert parse_answers(answers_payload).car_km_per_week == MAX_CAR_KM_PER_WEEK

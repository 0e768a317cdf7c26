"""Pytest configuration and fixtures."""

from __future__ import annotations

import asyncio
import inspect
import os
import sys
from collections.abc import Iterator
from typing import Any

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from carbon_quiz.estimation.factors import load_emission_factors  # noqa: E402
from carbon_quiz.schemas import QuizAnswers  # noqa: E402

_ENV_VARS = (
    "GEMINI_API_KEY",
    "CARBON_QUIZ_STORE_PATH",
    "CARBON_QUIZ_FACTORS_FILE",
    "CARBON_QUIZ_AI_MODEL",
    "CARBON_QUIZ_AI_BASE_URL",
    "CARBON_QUIZ_AI_TIMEOUT",
    "CARBON_QUIZ_LOG_LEVEL",
)


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "asyncio: mark test as requiring an event loop")


def pytest_pyfunc_call(pyfuncitem: Any) -> bool | None:
    """Execute async test functions without requiring pytest-asyncio."""

    if inspect.iscoroutinefunction(pyfuncitem.obj):
        call_kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in pyfuncitem._fixtureinfo.argnames  # type: ignore[attr-defined]
        }

        event_loop = asyncio.new_event_loop()
        try:
            event_loop.run_until_complete(pyfuncitem.obj(**call_kwargs))
        finally:
            event_loop.close()
        return True
    return None


@pytest.fixture(autouse=True)
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Iterator[None]:
    """Keep tests away from real credentials and the user's key store."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    store_dir = tmp_path_factory.mktemp("store")
    monkeypatch.setenv("CARBON_QUIZ_STORE_PATH", str(store_dir / "store.json"))
    load_emission_factors.cache_clear()
    yield
    load_emission_factors.cache_clear()


@pytest.fixture
def typical_answers() -> QuizAnswers:
    """Petrol driver, medium home, flexitarian diet."""

    return QuizAnswers(
        car_type="petrol",
        car_km_per_week=100,
        flights_per_year="none",
        public_transport="never",
        home_size="medium",
        renewable_energy=False,
        energy_efficiency="medium",
        diet="flexitarian",
        local_food="sometimes",
        food_waste="some",
    )


@pytest.fixture
def low_impact_answers() -> QuizAnswers:
    """Every answer set to its lowest-impact choice."""

    return QuizAnswers(
        car_type="none",
        car_km_per_week=0,
        flights_per_year="none",
        public_transport="never",
        home_size="small",
        renewable_energy=True,
        energy_efficiency="high",
        diet="vegan",
        local_food="mostly",
        food_waste="minimal",
    )


@pytest.fixture
def answers_payload() -> dict[str, object]:
    """camelCase payload as produced by the questionnaire front end."""

    return {
        "carType": "diesel",
        "carKmPerWeek": 250,
        "flightsPerYear": "3-5",
        "publicTransport": "rarely",
        "homeSize": "large",
        "renewableEnergy": False,
        "energyEfficiency": "low",
        "diet": "meat-heavy",
        "localFood": "rarely",
        "foodWaste": "significant",
    }

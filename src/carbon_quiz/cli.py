"""Command-line utilities for carbon_quiz."""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path
from typing import TextIO

from .errors import CarbonQuizError
from .estimation import FootprintEstimator, FootprintReport
from .estimation.reporting import render_text_report
from .insight import GeminiInsightClient
from .key_store import API_KEY_NAME, CredentialStore
from .logging_pipeline import configure_structured_logging, reset_structured_logging
from .schemas import (
    CarType,
    Diet,
    EnergyEfficiency,
    FlightFrequency,
    FoodWaste,
    HomeSize,
    LocalFood,
    MAX_CAR_KM_PER_WEEK,
    PublicTransportUse,
    QuizAnswers,
)
from .settings import get_settings

InputFunc = Callable[[str], str]


def _read_stdin() -> str | None:
    """Read JSON payload from stdin if available."""
    try:
        if sys.stdin and not sys.stdin.isatty():
            return sys.stdin.read()
    except IOError as e:
        print(f"Error reading stdin: {e}", file=sys.stderr)
    return None


def _load_json(path: str | None, stdin_payload: str | None) -> dict[str, object]:
    """Load JSON answers from file or stdin."""
    if path:
        text = Path(path).read_text(encoding="utf-8")
        return _parse_json_dict(text)
    if stdin_payload and stdin_payload.strip():
        return _parse_json_dict(stdin_payload)
    raise ValueError("No input provided. Use --input or pipe JSON via stdin.")


def _parse_json_dict(payload: str) -> dict[str, object]:
    """Parse a JSON string and ensure the result is a dictionary."""

    data = json.loads(payload)
    if not isinstance(data, dict):
        raise ValueError("Input JSON must be an object at the top level.")
    return {str(key): value for key, value in data.items()}


def _choose(
    question: str,
    enum_cls: type[Enum],
    default: Enum,
    input_func: InputFunc,
    out: TextIO,
) -> str:
    options = [member.value for member in enum_cls]
    prompt = f"{question} [{'/'.join(options)}] (default: {default.value}): "
    while True:
        reply = input_func(prompt).strip().lower()
        if not reply:
            return str(default.value)
        if reply in options:
            return reply
        print(f"Please choose one of: {', '.join(options)}", file=out)


def _ask_km(default: float, input_func: InputFunc, out: TextIO) -> float:
    prompt = f"How many kilometers do you drive per week? (default: {default:g}): "
    while True:
        reply = input_func(prompt).strip()
        if not reply:
            return default
        try:
            value = float(reply)
        except ValueError:
            value = -1.0
        if math.isfinite(value) and 0 <= value <= MAX_CAR_KM_PER_WEEK:
            return value
        print(
            f"Please enter a number of kilometers between 0 and {MAX_CAR_KM_PER_WEEK:,.0f}.",
            file=out,
        )


def _ask_yes_no(question: str, default: bool, input_func: InputFunc, out: TextIO) -> bool:
    hint = "Y/n" if default else "y/N"
    while True:
        reply = input_func(f"{question} [{hint}]: ").strip().lower()
        if not reply:
            return default
        if reply in {"y", "yes"}:
            return True
        if reply in {"n", "no"}:
            return False
        print("Please answer yes or no.", file=out)


def ask_answers(
    input_func: InputFunc | None = None, out: TextIO | None = None
) -> QuizAnswers:
    """Walk through the questionnaire interactively.

    Empty replies keep the pre-selected answer from
    :meth:`QuizAnswers.defaults`.
    """

    stream = out or sys.stdout
    input_func = input_func or input
    d = QuizAnswers.defaults()

    print("Step 1 of 3: Transportation", file=stream)
    car_type = _choose(
        "What type of car do you drive?", CarType, d.car_type, input_func, stream
    )
    km = 0.0
    if car_type != CarType.NONE.value:
        km = _ask_km(d.car_km_per_week, input_func, stream)
    flights = _choose(
        "How many flights do you take per year?",
        FlightFrequency,
        d.flights_per_year,
        input_func,
        stream,
    )
    public = _choose(
        "How often do you use public transport?",
        PublicTransportUse,
        d.public_transport,
        input_func,
        stream,
    )

    print("Step 2 of 3: Energy & Home", file=stream)
    home = _choose(
        "What size is your home? (small < 50m², medium 50-120m², large > 120m²)",
        HomeSize,
        d.home_size,
        input_func,
        stream,
    )
    renewable = _ask_yes_no(
        "Do you use renewable energy (solar/wind/green tariff)?",
        d.renewable_energy,
        input_func,
        stream,
    )
    efficiency = _choose(
        "How energy-efficient is your home?",
        EnergyEfficiency,
        d.energy_efficiency,
        input_func,
        stream,
    )

    print("Step 3 of 3: Food & Diet", file=stream)
    diet = _choose("What best describes your diet?", Diet, d.diet, input_func, stream)
    local = _choose(
        "How much of your food is locally sourced?",
        LocalFood,
        d.local_food,
        input_func,
        stream,
    )
    waste = _choose(
        "How much food do you waste?", FoodWaste, d.food_waste, input_func, stream
    )

    return QuizAnswers(
        car_type=car_type,
        car_km_per_week=km,
        flights_per_year=flights,
        public_transport=public,
        home_size=home,
        renewable_energy=renewable,
        energy_efficiency=efficiency,
        diet=diet,
        local_food=local,
        food_waste=waste,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="carbon-quiz",
        description="Estimate an annual carbon footprint from lifestyle answers.",
    )
    parser.add_argument(
        "--log-level",
        help="Log level for structured logs on stderr (default: WARNING).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def _add_output_options(cmd: argparse.ArgumentParser) -> None:
        cmd.add_argument(
            "--json", action="store_true", help="Print the report as JSON."
        )
        cmd.add_argument(
            "--explain",
            action="store_true",
            help="Request an AI explanation from the Gemini API.",
        )
        cmd.add_argument(
            "--api-key",
            help="Gemini API key. Falls back to GEMINI_API_KEY, then the key store.",
        )

    estimate = sub.add_parser(
        "estimate", help="Estimate a footprint from a JSON answers file."
    )
    estimate.add_argument(
        "--input",
        "-i",
        help="Path to a JSON answers file. If omitted, reads from stdin.",
    )
    _add_output_options(estimate)

    quiz = sub.add_parser("quiz", help="Answer the questionnaire interactively.")
    _add_output_options(quiz)

    set_key = sub.add_parser("set-key", help="Save the Gemini API key locally.")
    set_key.add_argument("key", help="API key to store.")

    sub.add_parser("clear-key", help="Remove the locally stored Gemini API key.")
    return parser


def _emit(report: FootprintReport, as_json: bool) -> None:
    if as_json:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(render_text_report(report))


def _run_report(args: argparse.Namespace, answers: QuizAnswers | dict[str, object]) -> int:
    client = GeminiInsightClient(api_key=args.api_key) if args.explain else None
    estimator = FootprintEstimator(insight_client=client)
    report = estimator.estimate(answers)
    if args.explain:
        report = estimator.explain(report)
    _emit(report, args.json)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the carbon-quiz command line."""
    parser = _build_parser()

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - controlled via tests
        exit_code = int(exc.code) if isinstance(exc.code, int) else 1
        return 0 if exit_code == 0 else 1

    settings = get_settings()
    level_name = (args.log_level or settings.log_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        print(f"Unknown log level: {args.log_level}", file=sys.stderr)
        return 1
    package_logger = logging.getLogger("carbon_quiz")
    log_handler = configure_structured_logging(
        package_logger, level=level, stream=sys.stderr
    )

    try:
        if args.command == "set-key":
            CredentialStore.from_settings(settings).save_api_key(args.key)
            print("API key saved.")
            return 0
        if args.command == "clear-key":
            removed = CredentialStore.from_settings(settings).delete(API_KEY_NAME)
            print("API key removed." if removed else "No API key stored.")
            return 0
        if args.command == "quiz":
            return _run_report(args, ask_answers())

        stdin_payload = None if args.input else _read_stdin()
        data = _load_json(args.input, stdin_payload)
        return _run_report(args, data)

    except CarbonQuizError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except (ValueError, OSError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print("Aborted.", file=sys.stderr)
        return 1
    finally:
        reset_structured_logging(package_logger, log_handler)


if __name__ == "__main__":
    raise SystemExit(main())

"""Environment-backed settings primitives for :mod:`carbon_quiz`."""

from __future__ import annotations

import math
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "DEFAULT_AI_BASE_URL",
    "DEFAULT_AI_MODEL",
    "DEFAULT_AI_TIMEOUT_SECONDS",
    "CarbonQuizSettings",
    "default_store_path",
    "get_settings",
]

DEFAULT_AI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_AI_MODEL = "gemini-2.0-flash"
DEFAULT_AI_TIMEOUT_SECONDS = 15.0


def default_store_path() -> Path:
    """Return the default location of the local key-value store."""

    return Path.home() / ".config" / "carbon-quiz" / "store.json"


class CarbonQuizSettings(BaseSettings):
    """Expose environment-derived configuration knobs for carbon-quiz.

    All environment lookups go through this class. Every attribute maps to a
    documented environment variable and falls back to an inline default when
    the variable is absent.

    Attributes:
        gemini_api_key: Gemini credential. Takes precedence over the key stored
            in the local key-value store.
        store_path: Location of the JSON key-value store.
        factors_file: Optional path to an emission-factor override JSON file.
        ai_model: Gemini model identifier used for explanations.
        ai_base_url: Base URL of the generative-language API.
        ai_timeout_seconds: Timeout applied to every explanation request.
        log_level: Default log level for the command-line front end.
    """

    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    store_path: str | None = Field(default=None, alias="CARBON_QUIZ_STORE_PATH")
    factors_file: str | None = Field(default=None, alias="CARBON_QUIZ_FACTORS_FILE")
    ai_model: str = Field(default=DEFAULT_AI_MODEL, alias="CARBON_QUIZ_AI_MODEL")
    ai_base_url: str = Field(
        default=DEFAULT_AI_BASE_URL, alias="CARBON_QUIZ_AI_BASE_URL"
    )
    ai_timeout_seconds: float = Field(
        default=DEFAULT_AI_TIMEOUT_SECONDS, alias="CARBON_QUIZ_AI_TIMEOUT"
    )
    log_level: str = Field(default="WARNING", alias="CARBON_QUIZ_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("ai_timeout_seconds", mode="before")
    @classmethod
    def _parse_timeout(cls, value: object) -> float:
        """Parse the timeout while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed positive float, or the default timeout when the value is
            missing, malformed, non-finite or not positive.
        """

        parsed: float | None = None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            parsed = float(value)
        elif isinstance(value, str):
            try:
                parsed = float(value.strip())
            except ValueError:
                parsed = None
        if parsed is None or not math.isfinite(parsed) or parsed <= 0:
            return DEFAULT_AI_TIMEOUT_SECONDS
        return parsed

    @field_validator("gemini_api_key", "store_path", "factors_file", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        """Treat empty strings as unset."""

        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> str:
        """Upper-case the configured level name."""

        if not isinstance(value, str) or not value.strip():
            return "WARNING"
        return value.strip().upper()

    @property
    def effective_store_path(self) -> Path:
        """Return the configured store path or the per-user default."""

        if self.store_path:
            return Path(self.store_path).expanduser()
        return default_store_path()


def get_settings() -> CarbonQuizSettings:
    """Return a :class:`CarbonQuizSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return CarbonQuizSettings()

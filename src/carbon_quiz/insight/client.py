"""Gemini ``generateContent`` client for footprint explanations.

Explanations are an optional enrichment step: every failure (missing
credential, transport error, HTTP error status, unexpected payload) is
logged and reported as ``None`` so the caller can always display the core
result.
"""

from __future__ import annotations

import logging

import httpx

from carbon_quiz.carbon_models import CarbonResult
from carbon_quiz.estimation.impact import ImpactLevel
from carbon_quiz.insight.prompt import build_prompt, build_request_body
from carbon_quiz.key_store import CredentialStore
from carbon_quiz.settings import CarbonQuizSettings, get_settings

LOGGER = logging.getLogger(__name__)

__all__ = ["GeminiInsightClient", "extract_text"]


def extract_text(payload: object) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` or ``None``.

    Raises:
        ValueError: If the payload does not have the expected shape.
    """

    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]  # type: ignore[index]
    except (KeyError, IndexError, TypeError) as exc:
        raise ValueError("Unexpected generateContent response shape") from exc
    if not isinstance(text, str):
        raise ValueError("generateContent text is not a string")
    return text.strip() or None


class GeminiInsightClient:
    """Request natural-language explanations of a footprint result."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str | None = None,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        settings: CarbonQuizSettings | None = None,
        store: CredentialStore | None = None,
    ) -> None:
        settings_obj = settings or get_settings()
        self._settings = settings_obj
        self._explicit_key = api_key
        self._store = store
        self._model = model or settings_obj.ai_model
        self._base = (base_url or settings_obj.ai_base_url).rstrip("/")
        self._timeout = (
            timeout_seconds
            if timeout_seconds is not None
            else settings_obj.ai_timeout_seconds
        )

    @property
    def endpoint(self) -> str:
        """Return the ``generateContent`` URL without credentials."""

        return f"{self._base}/models/{self._model}:generateContent"

    @property
    def has_credentials(self) -> bool:
        """Return whether an API key can be resolved."""

        return self._resolve_api_key() is not None

    def explain(self, result: CarbonResult, impact_level: ImpactLevel) -> str | None:
        """Return an explanation for ``result`` or ``None`` on any failure."""

        api_key = self._resolve_api_key()
        if not api_key:
            LOGGER.info(
                "Gemini API key not configured",
                extra={"provider": type(self).__name__},
            )
            return None

        body = build_request_body(build_prompt(result, impact_level))
        try:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.post(
                    self.endpoint, params={"key": api_key}, json=body
                )
                response.raise_for_status()
                payload = response.json()
        except Exception as exc:
            self._log_failure(exc)
            return None
        return self._parse(payload)

    async def aexplain(
        self, result: CarbonResult, impact_level: ImpactLevel
    ) -> str | None:
        """Asynchronous variant of :meth:`explain`.

        The coroutine can be cancelled by the caller; cancellation propagates
        as :class:`asyncio.CancelledError`.
        """

        api_key = self._resolve_api_key()
        if not api_key:
            LOGGER.info(
                "Gemini API key not configured",
                extra={"provider": type(self).__name__},
            )
            return None

        body = build_request_body(build_prompt(result, impact_level))
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self.endpoint, params={"key": api_key}, json=body
                )
                response.raise_for_status()
                payload = response.json()
        except Exception as exc:
            self._log_failure(exc)
            return None
        return self._parse(payload)

    def _parse(self, payload: object) -> str | None:
        try:
            text = extract_text(payload)
        except ValueError as exc:
            LOGGER.warning(
                "Gemini response parsing error",
                extra={"provider": type(self).__name__, "url": self.endpoint},
                exc_info=exc,
            )
            return None
        if text is None:
            LOGGER.info(
                "Gemini returned an empty explanation",
                extra={"provider": type(self).__name__, "url": self.endpoint},
            )
        return text

    def _log_failure(self, exc: Exception) -> None:
        extra: dict[str, object] = {
            "provider": type(self).__name__,
            "url": self.endpoint,
            "error_type": type(exc).__name__,
        }
        if isinstance(exc, httpx.HTTPStatusError):
            extra["status_code"] = exc.response.status_code
            message = "Gemini HTTP error"
        elif isinstance(exc, httpx.HTTPError):
            message = "Gemini transport error"
        elif isinstance(exc, (ValueError, TypeError)):
            message = "Gemini response decoding error"
        else:
            message = "Gemini unexpected error"
        # Exception text may include the request URL, which embeds the key.
        LOGGER.warning(message, extra=extra)

    def _resolve_api_key(self) -> str | None:
        if self._explicit_key and self._explicit_key.strip():
            return self._explicit_key.strip()
        if self._settings.gemini_api_key:
            return self._settings.gemini_api_key.strip()
        store = self._store or CredentialStore.from_settings(self._settings)
        return store.load_api_key()

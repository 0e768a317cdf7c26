"""Local JSON key-value store used to persist the API credential.

The store is a single JSON object on disk. Writes go to a temporary file in
the same directory and are moved into place with :func:`os.replace`, so a
reader never observes a half-written file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Final

from carbon_quiz.settings import CarbonQuizSettings, get_settings

LOGGER = logging.getLogger(__name__)

__all__ = ["API_KEY_NAME", "CredentialStore"]

API_KEY_NAME: Final[str] = "gemini_api_key"


class CredentialStore:
    """String key-value store backed by a JSON file."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = Path(path) if path is not None else get_settings().effective_store_path

    @classmethod
    def from_settings(cls, settings: CarbonQuizSettings | None = None) -> CredentialStore:
        """Return a store located according to ``settings``."""

        settings_obj = settings or get_settings()
        return cls(settings_obj.effective_store_path)

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key`` or ``None``."""

        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

        if not isinstance(value, str):
            raise TypeError("value must be a string")
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> bool:
        """Remove ``key``; return ``True`` when something was removed."""

        data = self._read()
        if key not in data:
            return False
        del data[key]
        self._write(data)
        return True

    def load_api_key(self) -> str | None:
        """Return the stored API credential, ignoring blank values."""

        value = self.get(API_KEY_NAME)
        if value is None or not value.strip():
            return None
        return value.strip()

    def save_api_key(self, value: str) -> None:
        """Persist the API credential under :data:`API_KEY_NAME`."""

        cleaned = value.strip()
        if not cleaned:
            raise ValueError("API key must not be empty")
        self.set(API_KEY_NAME, cleaned)

    def _read(self) -> dict[str, object]:
        """Load the store contents; missing or corrupt files read as empty."""

        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            LOGGER.warning(
                "Unable to read key store",
                extra={"path": str(self.path)},
                exc_info=exc,
            )
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            LOGGER.warning(
                "Key store is not valid JSON; treating as empty",
                extra={"path": str(self.path)},
                exc_info=exc,
            )
            return {}
        if not isinstance(data, dict):
            LOGGER.warning(
                "Key store does not hold a JSON object; treating as empty",
                extra={"path": str(self.path)},
            )
            return {}
        return {str(key): value for key, value in data.items()}

    def _write(self, data: dict[str, object]) -> None:
        """Atomically replace the store contents with ``data``."""

        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=str(self.path.parent), delete=False
            ) as tmp:
                temp_path = Path(tmp.name)
                json.dump(data, tmp, indent=2, sort_keys=True)
                tmp.flush()
                os.fsync(tmp.fileno())
            # Credentials should be readable by the owner only.
            os.chmod(temp_path, 0o600)
            os.replace(temp_path, self.path)
        except Exception:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise
        LOGGER.debug("Key store updated", extra={"path": str(self.path)})

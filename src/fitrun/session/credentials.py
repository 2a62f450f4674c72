"""Durable credential store: auth token and profile-completion flag."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from fitrun.config.paths import get_paths

logger = logging.getLogger(__name__)


class CredentialStore:
    """JSON-backed key-value store that survives restarts.

    Execution state is intentionally absent; it is always re-derived from
    the server.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or get_paths().session_file
        self._data: dict[str, Any] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            self._data = {}
            return
        try:
            loaded = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self._path, e)
            loaded = {}
        self._data = loaded if isinstance(loaded, dict) else {}

    def _save(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Failed to save session: %s", e)

    @property
    def token(self) -> str | None:
        token = self._data.get("token")
        return str(token) if token else None

    @property
    def profile_exists(self) -> bool:
        return bool(self._data.get("profile_exists", False))

    def save(self, token: str | None, profile_exists: bool) -> None:
        """Store (or drop, when token is None) the credential and profile flag."""
        if token:
            self._data["token"] = token
        else:
            self._data.pop("token", None)
        self._data["profile_exists"] = bool(profile_exists)
        self._save()

    def clear(self) -> None:
        """Forget everything; used on logout and on rejected credentials."""
        self._data = {}
        self._save()

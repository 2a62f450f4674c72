"""User settings stored as JSON in the global config directory.

Layout::

    {
      "theme": "textual-dark",
      "tick_interval_sec": 1.0,
      "api": {"base_url": "...", "timeout_sec": 15}
    }
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from fitrun.config.paths import get_paths

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:8080/api/v1"
DEFAULT_REQUEST_TIMEOUT_SEC = 15.0
DEFAULT_TICK_INTERVAL_SEC = 1.0
API_URL_ENV = "FITRUN_API_URL"


def get_settings_path() -> Path:
    return get_paths().global_settings


def detect_terminal_theme() -> str:
    """Pick a light or dark Textual theme from COLORFGBG ("fg;bg")."""
    background = os.environ.get("COLORFGBG", "").rpartition(";")[2]
    if background.isdigit() and int(background) >= 7:
        return "textual-light"
    return "textual-dark"


def _positive_float(raw: Any, default: float) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


class Settings:
    """Persistent fitrun settings. Every setter writes through to disk."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        path = get_settings_path()
        if not path.exists():
            self._data = {}
            return
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", path, e)
            loaded = {}
        self._data = loaded if isinstance(loaded, dict) else {}

    def _save(self) -> None:
        path = get_settings_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Could not write settings to %s: %s", path, e)
            return
        logger.info("Settings written to %s", path)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()

    @property
    def theme(self) -> str:
        return str(self._data.get("theme") or detect_terminal_theme())

    @theme.setter
    def theme(self, value: str) -> None:
        self.set("theme", value)

    # --- Fitness service ---

    def _api_section(self) -> dict[str, Any]:
        section = self._data.get("api")
        return section if isinstance(section, dict) else {}

    def _set_api(self, key: str, value: Any) -> None:
        section = self._api_section()
        section[key] = value
        self.set("api", section)

    @property
    def api_base_url(self) -> str:
        """Service base URL: FITRUN_API_URL, then settings, then the default."""
        url = os.environ.get(API_URL_ENV) or self._api_section().get("base_url")
        return str(url).rstrip("/") if url else DEFAULT_API_BASE_URL

    @api_base_url.setter
    def api_base_url(self, value: str) -> None:
        self._set_api("base_url", value.rstrip("/"))

    @property
    def request_timeout_sec(self) -> float:
        return _positive_float(
            self._api_section().get("timeout_sec"), DEFAULT_REQUEST_TIMEOUT_SEC
        )

    @request_timeout_sec.setter
    def request_timeout_sec(self, value: float) -> None:
        self._set_api("timeout_sec", float(value))

    @property
    def tick_interval_sec(self) -> float:
        """How often the running timer is redrawn."""
        return _positive_float(
            self._data.get("tick_interval_sec"), DEFAULT_TICK_INTERVAL_SEC
        )

    @tick_interval_sec.setter
    def tick_interval_sec(self, value: float) -> None:
        self.set("tick_interval_sec", float(value))


settings = Settings()

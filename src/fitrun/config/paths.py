"""Where fitrun keeps its files.

Global files live under the XDG base directories:
- settings.json in $XDG_CONFIG_HOME/fitrun (~/.config/fitrun)
- session.json in $XDG_STATE_HOME/fitrun (~/.local/state/fitrun)

The debug log is per working directory, in ./.fitrun/.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

APP_DIR_NAME = "fitrun"


def _xdg_dir(variable: str, *fallback: str) -> Path:
    value = os.environ.get(variable)
    if value:
        return Path(value)
    return Path.home().joinpath(*fallback)


def _config_root() -> Path:
    return _xdg_dir("XDG_CONFIG_HOME", ".config")


def _state_root() -> Path:
    return _xdg_dir("XDG_STATE_HOME", ".local", "state")


@dataclass
class FitrunPaths:
    """Resolved file locations for one process."""

    workspace: Path

    _config_home: Path = field(default_factory=_config_root)
    _state_home: Path = field(default_factory=_state_root)

    @property
    def workspace_config(self) -> Path:
        return self.workspace / f".{APP_DIR_NAME}"

    @property
    def debug_log(self) -> Path:
        return self.workspace_config / "debug.log"

    @property
    def global_config_dir(self) -> Path:
        return self._config_home / APP_DIR_NAME

    @property
    def global_settings(self) -> Path:
        return self.global_config_dir / "settings.json"

    @property
    def global_state_dir(self) -> Path:
        return self._state_home / APP_DIR_NAME

    @property
    def session_file(self) -> Path:
        """Stored credential and profile flag."""
        return self.global_state_dir / "session.json"


_paths: FitrunPaths | None = None


def get_paths(workspace: Path | None = None) -> FitrunPaths:
    """Return the process-wide paths, resolving them on first use.

    ``workspace`` only matters on the first call; it defaults to the
    current directory.
    """
    global _paths
    if _paths is None:
        _paths = FitrunPaths(workspace=workspace or Path.cwd())
    return _paths


def reset_paths() -> None:
    """Forget resolved paths so the next call re-reads cwd and XDG vars."""
    global _paths
    _paths = None

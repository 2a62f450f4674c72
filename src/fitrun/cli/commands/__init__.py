"""CLI command handlers."""

from .auth import cmd_login, cmd_logout
from .execution import cmd_finish, cmd_pause, cmd_resume, cmd_start
from .history import cmd_history
from .stats import cmd_stats
from .status import cmd_status
from .tui import cmd_tui

__all__ = [
    "cmd_finish",
    "cmd_history",
    "cmd_login",
    "cmd_logout",
    "cmd_pause",
    "cmd_resume",
    "cmd_start",
    "cmd_stats",
    "cmd_status",
    "cmd_tui",
]

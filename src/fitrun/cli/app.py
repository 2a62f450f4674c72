"""Entry point wiring: global options, logging, then the subcommand."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeAlias

from fitrun.cli.commands import (
    cmd_finish,
    cmd_history,
    cmd_login,
    cmd_logout,
    cmd_pause,
    cmd_resume,
    cmd_start,
    cmd_stats,
    cmd_status,
    cmd_tui,
)
from fitrun.cli.parser import parse_args
from fitrun.config.paths import reset_paths
from fitrun.config.settings import API_URL_ENV

logger = logging.getLogger(__name__)

CommandHandler: TypeAlias = Callable[[argparse.Namespace], int]


def _handlers() -> dict[str, CommandHandler]:
    return {
        "tui": cmd_tui,
        "login": cmd_login,
        "logout": cmd_logout,
        "status": cmd_status,
        "start": cmd_start,
        "pause": cmd_pause,
        "resume": cmd_resume,
        "finish": cmd_finish,
        "history": cmd_history,
        "stats": cmd_stats,
    }


def dispatch(args: argparse.Namespace) -> int:
    """Run the handler for ``args.command``; no subcommand opens the TUI."""
    handler = _handlers().get(args.command or "tui", cmd_tui)
    logger.debug("Dispatching %s", args.command or "tui")
    return handler(args)


def _enter_workdir(workdir: Path) -> None:
    target = workdir.resolve()
    target.mkdir(parents=True, exist_ok=True)
    os.chdir(target)
    # Debug log location depends on cwd
    reset_paths()


def run(
    argv: Sequence[str] | None = None,
    *,
    configure_logging: Callable[[], None] | None = None,
) -> int:
    """Apply global options, set up logging and run one command.

    Returns:
        Process exit code.
    """
    args = parse_args(argv)
    if args.workdir:
        _enter_workdir(args.workdir)
    if args.api_url:
        os.environ[API_URL_ENV] = args.api_url
    if configure_logging is not None:
        configure_logging()

    logger.info("fitrun %s in %s", args.command or "tui", Path.cwd())
    return dispatch(args)

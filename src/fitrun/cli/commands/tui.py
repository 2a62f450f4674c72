"""TUI launch command."""

from __future__ import annotations

import argparse

from fitrun.tui.app import FitrunApp


def cmd_tui(args: argparse.Namespace) -> int:
    """Launch the TUI application."""
    del args
    app = FitrunApp()
    app.run()
    return 0

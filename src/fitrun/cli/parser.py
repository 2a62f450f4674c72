"""Argument parser construction for the fitrun CLI."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from fitrun.api.client import DEFAULT_STATS_METRIC, DEFAULT_STATS_PERIOD
from fitrun.models.execution import ActivityType

ACTIVITY_CHOICES = [activity.value for activity in ActivityType]


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        description="fitrun - track route executions and earn points"
    )
    parser.add_argument(
        "--workdir",
        "-w",
        type=Path,
        help="Working directory for logs (default: current directory)",
    )
    parser.add_argument(
        "--api-url",
        help="Fitness service base URL (overrides settings)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("tui", help="Open the interactive terminal UI")

    # Login command
    login_parser = subparsers.add_parser(
        "login",
        help="Log in and store the session token",
    )
    login_parser.add_argument("email", help="Account email")
    login_parser.add_argument(
        "--password",
        "-p",
        help="Account password (prompted when omitted)",
    )

    subparsers.add_parser("logout", help="Forget the stored session")

    subparsers.add_parser(
        "status",
        help="Show the active execution and its elapsed time",
    )

    # Start command
    start_parser = subparsers.add_parser(
        "start",
        help="Start executing a route",
    )
    start_parser.add_argument("route_id", help="Route to execute")
    start_parser.add_argument(
        "--activity",
        "-a",
        required=True,
        choices=ACTIVITY_CHOICES,
        help="Activity type",
    )

    subparsers.add_parser("pause", help="Pause the active execution")
    subparsers.add_parser("resume", help="Resume the paused execution")

    # Finish command
    finish_parser = subparsers.add_parser(
        "finish",
        help="Finish the active execution and show the score",
    )
    finish_parser.add_argument(
        "--activity",
        "-a",
        choices=ACTIVITY_CHOICES,
        help="Activity type (required)",
    )
    finish_parser.add_argument(
        "--notes",
        "-n",
        default="",
        help="Optional note about the activity",
    )

    subparsers.add_parser("history", help="List finished executions")

    # Stats command
    stats_parser = subparsers.add_parser(
        "stats",
        help="Show today's KPIs, your points and recent evolution",
    )
    stats_parser.add_argument(
        "--metric",
        "-m",
        default=DEFAULT_STATS_METRIC,
        help=f"Metric to chart (default: {DEFAULT_STATS_METRIC})",
    )
    stats_parser.add_argument(
        "--period",
        "-p",
        default=DEFAULT_STATS_PERIOD,
        help=f"Period to chart, e.g. 7d or 30d (default: {DEFAULT_STATS_PERIOD})",
    )

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments from argv (or sys.argv when omitted)."""
    parser = build_parser()
    if argv is None:
        return parser.parse_args()
    return parser.parse_args(list(argv))

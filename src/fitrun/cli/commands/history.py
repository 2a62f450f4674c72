"""History command: finished executions, newest first."""

from __future__ import annotations

import argparse
import asyncio

from fitrun.cli.context import open_runtime, require_login, run_command
from fitrun.execution.elapsed import elapsed_seconds, format_duration
from fitrun.models.execution import Execution


def format_history_row(execution: Execution) -> str:
    """Render one finished execution as a table row."""
    when = (execution.end_time or execution.start_time).strftime("%Y-%m-%d %H:%M")
    if execution.duration_sec is not None:
        duration = format_duration(execution.duration_sec)
    elif execution.end_time is not None:
        duration = format_duration(
            elapsed_seconds(
                execution.end_time,
                execution.start_time,
                execution.total_paused_time_sec,
            )
        )
    else:
        duration = "--:--:--"
    route = execution.route_name or execution.route_id
    distance = (
        f"{execution.distance_km:.2f} km" if execution.distance_km is not None else "-"
    )
    points = execution.points if execution.points is not None else "-"
    return f"{when}  {route:<24.24}  {distance:>10}  {duration}  {points:>5} pts"


def cmd_history(args: argparse.Namespace) -> int:
    """Print the execution history."""
    del args

    async def _history() -> int:
        async with open_runtime() as runtime:
            if not require_login(runtime.session):
                return 1
            history = await runtime.api.get_execution_history()
        if not history:
            print("No finished executions yet")
            return 0
        for execution in history:
            print(format_history_row(execution))
        return 0

    return asyncio.run(run_command(_history))

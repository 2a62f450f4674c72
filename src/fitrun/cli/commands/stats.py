"""Stats command: today's KPIs, profile points and the evolution chart."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import TypeVar

from fitrun.cli.context import open_runtime, require_login, run_command
from fitrun.dashboard import build_evolution_lines, build_kpi_lines, build_points_line
from fitrun.errors import AuthError, FitrunError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _print_section(
    title: str,
    load: Callable[[], Awaitable[T]],
    render: Callable[[T], list[str]],
) -> bool:
    """Load and print one section; a failure is reported but not fatal."""
    print(title)
    try:
        data = await load()
    except AuthError:
        raise
    except FitrunError as e:
        logger.warning("%s unavailable: %s", title, e)
        print(f"Error: {e}", file=sys.stderr)
        print()
        return False
    for line in render(data):
        print(f"  {line}")
    print()
    return True


def cmd_stats(args: argparse.Namespace) -> int:
    """Print today's KPIs, accumulated points and the metric's evolution."""

    async def _stats() -> int:
        async with open_runtime() as runtime:
            if not require_login(runtime.session):
                return 1
            api = runtime.api
            results = [
                await _print_section("Today", api.get_home_kpis, build_kpi_lines),
                await _print_section(
                    "Profile",
                    api.get_profile,
                    lambda profile: [build_points_line(profile)],
                ),
                await _print_section(
                    f"Last {args.period}",
                    lambda: api.get_stats_evolution(args.metric, args.period),
                    lambda points: build_evolution_lines(points, args.metric),
                ),
            ]
        return 0 if all(results) else 1

    return asyncio.run(run_command(_stats))

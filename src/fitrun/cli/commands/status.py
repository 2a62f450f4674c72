"""Status command: what is running right now."""

from __future__ import annotations

import argparse
import asyncio
import sys

from fitrun.cli.context import open_runtime, require_login, run_command
from fitrun.execution.controller import ExecutionController
from fitrun.models.execution import Execution


def describe_execution(execution: Execution, controller: ExecutionController) -> str:
    """One-line summary of an execution with its elapsed time."""
    route = execution.route_name or execution.route_id
    return (
        f"{execution.id} on route {route}: {execution.status.value} "
        f"{controller.elapsed.display()}"
    )


def cmd_status(args: argparse.Namespace) -> int:
    """Run the active-execution check and print the result."""
    del args

    async def _status() -> int:
        async with open_runtime() as runtime:
            if not require_login(runtime.session):
                return 1
            active = await runtime.guard.check()
            if runtime.guard.conflicts:
                print(
                    "Warning: the server reports several active executions: "
                    + ", ".join(runtime.guard.conflicts),
                    file=sys.stderr,
                )
            if active is None:
                print("No active execution")
                return 0
            runtime.controller.adopt(active)
            print(describe_execution(active, runtime.controller))
            return 0

    return asyncio.run(run_command(_status))

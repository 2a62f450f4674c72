"""Lifecycle commands: start, pause, resume and finish."""

from __future__ import annotations

import argparse
import asyncio
import sys

from fitrun.cli.commands.status import describe_execution
from fitrun.cli.context import CliRuntime, open_runtime, require_login, run_command
from fitrun.execution.presenter import (
    FinishFlow,
    FinishForm,
    FinishStage,
    build_result_lines,
)
from fitrun.models.execution import Execution


async def _load_active(runtime: CliRuntime) -> Execution | None:
    """Consult the guard and hand its answer to the controller."""
    active = await runtime.guard.check()
    if active is None:
        print("Error: No active execution", file=sys.stderr)
        return None
    runtime.controller.adopt(active)
    return active


def cmd_start(args: argparse.Namespace) -> int:
    """Start a new execution unless one is already active."""

    async def _start() -> int:
        async with open_runtime() as runtime:
            if not require_login(runtime.session):
                return 1
            await runtime.guard.check()
            execution = await runtime.controller.start(args.route_id, args.activity)
            print(f"Started {describe_execution(execution, runtime.controller)}")
            return 0

    return asyncio.run(run_command(_start))


def cmd_pause(args: argparse.Namespace) -> int:
    """Pause the active execution."""
    del args

    async def _pause() -> int:
        async with open_runtime() as runtime:
            if not require_login(runtime.session):
                return 1
            if await _load_active(runtime) is None:
                return 1
            execution = await runtime.controller.pause()
            print(f"Paused {describe_execution(execution, runtime.controller)}")
            return 0

    return asyncio.run(run_command(_pause))


def cmd_resume(args: argparse.Namespace) -> int:
    """Resume the paused execution."""
    del args

    async def _resume() -> int:
        async with open_runtime() as runtime:
            if not require_login(runtime.session):
                return 1
            if await _load_active(runtime) is None:
                return 1
            execution = await runtime.controller.resume()
            print(f"Resumed {describe_execution(execution, runtime.controller)}")
            return 0

    return asyncio.run(run_command(_resume))


def _wait_for_return_home() -> None:
    if not sys.stdin.isatty():
        return
    try:
        input("\nPress Enter to return home ")
    except EOFError:
        print()


def cmd_finish(args: argparse.Namespace) -> int:
    """Finish the active execution, print the score, then return home."""
    flow: FinishFlow | None = None

    async def _finish() -> int:
        nonlocal flow
        async with open_runtime() as runtime:
            if not require_login(runtime.session):
                return 1
            form = FinishForm(activity_type=args.activity, notes=args.notes)
            # Reject a bad form before touching the network
            form.validate()
            if await _load_active(runtime) is None:
                return 1

            flow = FinishFlow(runtime.controller)
            result = await flow.submit(form)
            if result is None:
                return 1
            for line in build_result_lines(result):
                print(line)
            return 0

    code = asyncio.run(run_command(_finish))
    if flow is not None and flow.stage == FinishStage.RESULT:
        _wait_for_return_home()
        flow.return_home()
    return code

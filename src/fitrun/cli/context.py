"""Shared context helpers for CLI command modules."""

from __future__ import annotations

import sys
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fitrun.api.client import FitnessApiClient
from fitrun.errors import AuthError, FitrunError, ValidationError
from fitrun.execution.controller import ExecutionController
from fitrun.execution.guard import ActiveExecutionGuard
from fitrun.session.state import Session, get_session


@dataclass
class CliRuntime:
    """Collaborators wired up for one CLI invocation."""

    session: Session
    api: FitnessApiClient
    guard: ActiveExecutionGuard
    controller: ExecutionController


def _report_session_cleared() -> None:
    print("Your session has expired. Run 'fitrun login' again.", file=sys.stderr)


@asynccontextmanager
async def open_runtime(
    session: Session | None = None,
    api: FitnessApiClient | None = None,
) -> AsyncIterator[CliRuntime]:
    """Wire session, API client, guard and controller together."""
    session = session or get_session()
    client = api or FitnessApiClient.for_session(
        session, on_auth_error=_report_session_cleared
    )
    guard = ActiveExecutionGuard(client, session)
    controller = ExecutionController(client, guard)
    try:
        yield CliRuntime(
            session=session, api=client, guard=guard, controller=controller
        )
    finally:
        await client.aclose()


def require_login(session: Session) -> bool:
    """Print a user-facing error and return False when not logged in."""
    if session.is_authenticated:
        return True
    print("Error: Not logged in. Run 'fitrun login EMAIL' first.", file=sys.stderr)
    return False


async def run_command(action: Callable[[], Awaitable[int]]) -> int:
    """Run a command body, turning fitrun errors into exit codes."""
    try:
        return await action()
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2
    except AuthError:
        # The client already told the user and cleared the session
        return 1
    except FitrunError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

"""Tests for the active-execution guard."""

import asyncio
import logging

import pytest
from conftest import FakeExecutionApi, make_execution

from fitrun.errors import NetworkError, ServerError
from fitrun.execution.guard import ActiveExecutionGuard
from fitrun.models.execution import ExecutionStatus
from fitrun.session.state import Session


def test_check_caches_active_execution_on_session(
    api: FakeExecutionApi, guard: ActiveExecutionGuard, session: Session
) -> None:
    running = make_execution(id="ex-9")
    api.executions = [make_execution(ExecutionStatus.FINISHED, id="ex-1"), running]

    found = asyncio.run(guard.check())

    assert found == running
    assert session.active_execution == running
    assert guard.active == running


def test_check_with_only_terminal_executions_clears_pointer(
    api: FakeExecutionApi, guard: ActiveExecutionGuard, session: Session
) -> None:
    session.set_active_execution(make_execution())
    api.executions = [
        make_execution(ExecutionStatus.FINISHED, id="ex-1"),
        make_execution(ExecutionStatus.CANCELLED, id="ex-2"),
    ]

    assert asyncio.run(guard.check()) is None
    assert session.active_execution is None


def test_paused_execution_counts_as_active(
    api: FakeExecutionApi, guard: ActiveExecutionGuard
) -> None:
    paused = make_execution(ExecutionStatus.PAUSED)
    api.executions = [paused]

    assert asyncio.run(guard.check()) == paused


@pytest.mark.parametrize(
    "error", [NetworkError("offline"), ServerError("boom", 500), RuntimeError("bug")]
)
def test_failure_fails_open(
    api: FakeExecutionApi,
    guard: ActiveExecutionGuard,
    session: Session,
    error: Exception,
) -> None:
    session.set_active_execution(make_execution())
    api.fail["list"] = error

    assert asyncio.run(guard.check()) is None
    assert session.active_execution is None
    assert not guard.in_flight


def test_concurrent_checks_issue_one_request(
    api: FakeExecutionApi, guard: ActiveExecutionGuard
) -> None:
    running = make_execution()
    api.executions = [running]

    async def scenario() -> tuple[object, object]:
        api.gate = asyncio.Event()
        first = asyncio.create_task(guard.check())
        await asyncio.sleep(0)
        assert guard.in_flight
        # Second caller returns at once with the current pointer
        second = await guard.check()
        api.gate.set()
        return await first, second

    first, second = asyncio.run(scenario())

    assert api.call_names() == ["list"]
    assert first == running
    assert second is None
    assert not guard.in_flight


def test_sequential_checks_each_hit_the_server(
    api: FakeExecutionApi, guard: ActiveExecutionGuard
) -> None:
    asyncio.run(guard.check())
    asyncio.run(guard.check())

    assert api.call_names() == ["list", "list"]


def test_multiple_active_executions_logs_and_uses_first(
    api: FakeExecutionApi,
    guard: ActiveExecutionGuard,
    caplog: pytest.LogCaptureFixture,
) -> None:
    first = make_execution(id="ex-1")
    api.executions = [first, make_execution(ExecutionStatus.PAUSED, id="ex-2")]

    with caplog.at_level(logging.ERROR, logger="fitrun.execution.guard"):
        found = asyncio.run(guard.check())

    assert found == first
    assert guard.conflicts == ("ex-1", "ex-2")
    assert "Integrity violation" in caplog.text


def test_conflicts_reset_on_next_clean_check(
    api: FakeExecutionApi, guard: ActiveExecutionGuard
) -> None:
    api.executions = [make_execution(id="ex-1"), make_execution(id="ex-2")]
    asyncio.run(guard.check())
    api.executions = [make_execution(id="ex-1")]

    asyncio.run(guard.check())

    assert guard.conflicts == ()


def test_track_follows_command_results(
    guard: ActiveExecutionGuard, session: Session
) -> None:
    paused = make_execution(ExecutionStatus.PAUSED)
    guard.track(paused)
    assert session.active_execution == paused

    guard.track(make_execution(ExecutionStatus.FINISHED))
    assert session.active_execution is None

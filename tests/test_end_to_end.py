"""Full lifecycle: start, pause, resume, finish, score, home."""

import asyncio

from conftest import FakeClock, FakeExecutionApi

from fitrun.execution.controller import ExecutionController
from fitrun.execution.guard import ActiveExecutionGuard
from fitrun.execution.presenter import (
    GOAL_EXCEEDED_ICON,
    FinishFlow,
    FinishForm,
    build_result_message,
)
from fitrun.models.execution import ExecutionStatus


def test_run_lifecycle_ends_with_score_and_no_active_execution(
    api: FakeExecutionApi,
    clock: FakeClock,
    controller: ExecutionController,
    guard: ActiveExecutionGuard,
) -> None:
    assert asyncio.run(guard.check()) is None

    asyncio.run(controller.start("route-7", "RUNNING_MODERATE"))
    clock.advance(10)
    asyncio.run(controller.pause())

    clock.advance(120)
    assert controller.elapsed.display() == "00:00:10"

    # A fresh check while paused still reports the execution
    assert asyncio.run(guard.check()) is not None

    asyncio.run(controller.resume())
    clock.advance(20)
    assert controller.elapsed.display() == "00:00:30"

    flow = FinishFlow(controller)
    result = asyncio.run(flow.submit(FinishForm("RUNNING_MODERATE", "morning loop")))

    assert result is not None
    assert result.points == 150
    assert result.icon == GOAL_EXCEEDED_ICON
    assert "Goal exceeded" in build_result_message(result)
    assert controller.state.status == ExecutionStatus.FINISHED

    flow.return_home()

    assert guard.active is None
    assert asyncio.run(guard.check()) is None
    assert api.call_names() == [
        "list",
        "start",
        "pause",
        "list",
        "resume",
        "finish",
        "profile",
        "list",
    ]

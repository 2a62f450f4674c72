"""Screen behaviour driven through Textual's pilot."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeAlias

from conftest import FakeExecutionApi, make_execution
from textual.pilot import Pilot
from textual.screen import Screen
from textual.widgets import Button, Select

from fitrun.models.execution import ExecutionStatus
from fitrun.session.state import Session
from fitrun.tui.app import FitrunApp
from fitrun.tui.screens import (
    ActiveRunScreen,
    FinishModal,
    HomeScreen,
    ScoreModal,
)

COMMAND_BUTTONS = ("#btn-pause", "#btn-resume", "#btn-finish")

Scenario: TypeAlias = Callable[[FitrunApp, Pilot], Awaitable[None]]


def run_app(api: FakeExecutionApi, session: Session, scenario: Scenario) -> None:
    async def _go() -> None:
        app = FitrunApp(api=api, session=session)
        async with app.run_test() as pilot:
            await settle(pilot)
            await scenario(app, pilot)

    asyncio.run(_go())


async def settle(pilot: Pilot) -> None:
    """Let workers finish and the screen process what they posted."""
    await pilot.pause()
    await pilot.app.workers.wait_for_complete()
    await pilot.pause()


def button(screen: Screen, selector: str) -> Button:
    return screen.query_one(selector, Button)


async def open_active_run(app: FitrunApp, pilot: Pilot) -> ActiveRunScreen:
    assert isinstance(app.screen, HomeScreen)
    await pilot.press("r")
    await settle(pilot)
    screen = app.screen
    assert isinstance(screen, ActiveRunScreen)
    return screen


def test_home_loads_guard_and_dashboard(
    api: FakeExecutionApi, session: Session
) -> None:
    async def scenario(app: FitrunApp, pilot: Pilot) -> None:
        assert isinstance(app.screen, HomeScreen)
        assert {"list", "kpis", "profile"} <= set(api.call_names())
        assert button(app.screen, "#btn-start").disabled is False
        assert button(app.screen, "#btn-resume").disabled is True

    run_app(api, session, scenario)


def test_controls_disabled_while_command_pending(
    api: FakeExecutionApi, session: Session
) -> None:
    api.executions = [make_execution()]

    async def scenario(app: FitrunApp, pilot: Pilot) -> None:
        screen = await open_active_run(app, pilot)
        assert not button(screen, "#btn-pause").disabled
        assert button(screen, "#btn-resume").disabled

        api.gate = asyncio.Event()
        await pilot.press("p")
        await pilot.pause(0.1)

        assert app.controller.state.pending == "pause"
        assert all(button(screen, b).disabled for b in COMMAND_BUTTONS)

        api.gate.set()
        await settle(pilot)

        assert app.controller.state.status == ExecutionStatus.PAUSED
        assert button(screen, "#btn-pause").disabled
        assert not button(screen, "#btn-resume").disabled
        assert not button(screen, "#btn-finish").disabled

    run_app(api, session, scenario)


def test_ticker_follows_status_and_stops_on_unmount(
    api: FakeExecutionApi, session: Session
) -> None:
    api.executions = [make_execution()]

    async def scenario(app: FitrunApp, pilot: Pilot) -> None:
        screen = await open_active_run(app, pilot)
        assert screen._ticker.running

        await pilot.press("p")
        await settle(pilot)
        assert not screen._ticker.running

        await pilot.press("r")
        await settle(pilot)
        assert screen._ticker.running

        await pilot.press("escape")
        await settle(pilot)

        assert isinstance(app.screen, HomeScreen)
        assert not screen._ticker.running

    run_app(api, session, scenario)


def test_score_stays_until_return_home(
    api: FakeExecutionApi, session: Session
) -> None:
    api.executions = [make_execution()]

    async def scenario(app: FitrunApp, pilot: Pilot) -> None:
        await open_active_run(app, pilot)
        await pilot.press("f")
        await settle(pilot)

        finish = app.screen
        assert isinstance(finish, FinishModal)
        finish.query_one("#activity-select", Select).value = "RUNNING_MODERATE"
        button(finish, "#btn-confirm").press()
        await settle(pilot)

        score = app.screen
        assert isinstance(score, ScoreModal)
        assert score.result.points == 150
        assert score.result.goal_exceeded

        await pilot.pause(0.3)
        assert app.screen is score
        assert app.guard.active is not None

        button(score, "#btn-home").press()
        await settle(pilot)

        assert isinstance(app.screen, HomeScreen)
        assert app.guard.active is None
        assert app.controller.execution is None

    run_app(api, session, scenario)


def test_finish_without_activity_stays_open(
    api: FakeExecutionApi, session: Session
) -> None:
    api.executions = [make_execution()]

    async def scenario(app: FitrunApp, pilot: Pilot) -> None:
        await open_active_run(app, pilot)
        await pilot.press("f")
        await settle(pilot)

        finish = app.screen
        assert isinstance(finish, FinishModal)
        button(finish, "#btn-confirm").press()
        await settle(pilot)

        assert app.screen is finish
        assert "finish" not in api.call_names()

    run_app(api, session, scenario)

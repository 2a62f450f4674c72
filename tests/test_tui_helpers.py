"""Tests for the pure helpers behind the TUI screens."""

import pytest
from conftest import make_execution

from fitrun.errors import ValidationError
from fitrun.execution.controller import RunState
from fitrun.models.execution import ActivityType, ExecutionStatus
from fitrun.tui.screens.active_run import format_status, status_label
from fitrun.tui.screens.home import describe_active
from fitrun.tui.screens.start import (
    activity_options,
    build_start_request,
    selected_activity,
)


class TestHome:
    def test_no_active_execution_offers_start(self) -> None:
        assert "start one" in describe_active(None)

    def test_paused_execution_offers_resume(self) -> None:
        text = describe_active(
            make_execution(ExecutionStatus.PAUSED, route_name="River loop")
        )
        assert "River loop" in text
        assert "paused" in text
        assert "resume" in text


class TestStartModal:
    def test_options_cover_every_activity(self) -> None:
        options = activity_options()
        assert len(options) == len(ActivityType)
        assert ("Running (moderate)", "RUNNING_MODERATE") in options

    def test_blank_selection_is_none(self) -> None:
        assert selected_activity(object()) is None
        assert selected_activity("CYCLING_LIGHT") == "CYCLING_LIGHT"

    def test_build_request(self) -> None:
        request = build_start_request("  route-7 ", "RUNNING_LIGHT")
        assert request.route_id == "route-7"
        assert request.activity_type is ActivityType.RUNNING_LIGHT

    @pytest.mark.parametrize(
        ("route", "activity", "field"),
        [("", "RUNNING_LIGHT", "route_id"), ("route-7", None, "activity_type")],
    )
    def test_build_request_validates(
        self, route: str, activity: str | None, field: str
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            build_start_request(route, activity)
        assert exc_info.value.field == field


class TestRunStatusLabel:
    def test_pending_command_wins(self) -> None:
        state = RunState(execution=make_execution(), pending="pause")
        assert status_label(state) == "Pause..."

    def test_confirmed_status(self) -> None:
        state = RunState(execution=make_execution(ExecutionStatus.PAUSED))
        assert status_label(state) == "Paused"

    def test_no_execution(self) -> None:
        assert status_label(RunState()) == "No activity"

    def test_formatted_status_has_coloured_icon(self) -> None:
        text = format_status(RunState(execution=make_execution()))
        assert text.plain == "● In progress"
        assert text.spans[0].style == "green"

    def test_formatted_pending_status_is_dim(self) -> None:
        text = format_status(RunState(execution=make_execution(), pending="finish"))
        assert text.plain == "Finish..."
        assert text.spans[0].style == "dim"

"""Live view of the execution being run."""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, cast

from rich.text import Text
from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Static

from fitrun.config import settings
from fitrun.errors import FitrunError
from fitrun.execution.controller import RunState
from fitrun.execution.presenter import FinishFlow, ScoreResult
from fitrun.execution.ticker import Ticker
from fitrun.models.execution import ActivityType, ExecutionStatus
from fitrun.tui.screens.finish import FinishModal
from fitrun.tui.screens.score import ScoreModal

if TYPE_CHECKING:
    from fitrun.tui.app import FitrunApp

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    ExecutionStatus.IN_PROGRESS: "In progress",
    ExecutionStatus.PAUSED: "Paused",
    ExecutionStatus.FINISHED: "Finished",
    ExecutionStatus.CANCELLED: "Cancelled",
    ExecutionStatus.FAILED: "Failed",
    ExecutionStatus.UNKNOWN: "Ended",
}

STATUS_STYLES = {
    ExecutionStatus.IN_PROGRESS: ("●", "green"),
    ExecutionStatus.PAUSED: ("❚❚", "yellow"),
    ExecutionStatus.FINISHED: ("✓", "cyan"),
    ExecutionStatus.CANCELLED: ("✗", "red"),
    ExecutionStatus.FAILED: ("✗", "red"),
    ExecutionStatus.UNKNOWN: ("?", "dim"),
}

KNOWN_ACTIVITIES = {activity.value for activity in ActivityType}


def status_label(state: RunState) -> str:
    if state.pending is not None:
        return f"{state.pending.capitalize()}..."
    if state.status is None:
        return "No activity"
    return STATUS_LABELS[state.status]


def format_status(state: RunState) -> Text:
    """Status line with a coloured icon; pending commands show dimmed."""
    result = Text()
    if state.pending is None and state.status is not None:
        icon, color = STATUS_STYLES[state.status]
        result.append(icon, style=color)
        result.append(" ")
        result.append(status_label(state))
    else:
        result.append(status_label(state), style="dim")
    return result


class ActiveRunScreen(Screen):
    """Elapsed timer with pause, resume and finish controls."""

    BINDINGS = [
        Binding("p", "pause", "Pause", show=True),
        Binding("r", "resume", "Resume", show=True),
        Binding("f", "finish", "Finish", show=True),
        Binding("x", "dismiss_error", "Dismiss error", show=False),
        Binding("escape", "back", "Home", show=True),
    ]

    DEFAULT_CSS = """
    ActiveRunScreen > Vertical {
        padding: 1 2;
        height: auto;
    }

    ActiveRunScreen #run-route {
        text-style: bold;
    }

    ActiveRunScreen #run-timer {
        text-style: bold;
        color: $success;
        padding: 1 0;
    }

    ActiveRunScreen #run-status {
        color: $text-muted;
    }

    ActiveRunScreen #run-error {
        color: $error;
        height: auto;
        padding-top: 1;
    }

    ActiveRunScreen .button-row {
        height: auto;
        margin-top: 1;
    }

    ActiveRunScreen .button-row Button {
        margin: 0 1 0 0;
    }
    """

    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self._ticker = Ticker(
            lambda: self.set_interval(settings.tick_interval_sec, self._tick)
        )
        self._unsubscribe: list[Callable[[], None]] = []
        self._flow: FinishFlow | None = None

    @property
    def fitrun_app(self) -> "FitrunApp":
        return cast("FitrunApp", self.app)

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical():
            yield Static("", id="run-route")
            yield Static("00:00:00", id="run-timer")
            yield Static("", id="run-status")
            yield Static("", id="run-error")
            with Horizontal(classes="button-row"):
                yield Button("Pause", id="btn-pause", variant="warning")
                yield Button("Resume", id="btn-resume", variant="success")
                yield Button("Finish", id="btn-finish", variant="error")
        yield Footer()

    def on_mount(self) -> None:
        self.app.sub_title = "Active run"
        controller = self.fitrun_app.controller
        self._unsubscribe.append(controller.subscribe(self._on_state))
        self._on_state(controller.state)

    def on_unmount(self) -> None:
        self._ticker.cancel()
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe.clear()
        if self._flow is not None:
            self._flow.dispose()

    def _tick(self) -> None:
        self.query_one("#run-timer", Static).update(
            self.fitrun_app.controller.elapsed.display()
        )

    def _on_state(self, state: RunState) -> None:
        execution = state.execution
        route = ""
        if execution is not None:
            route = f"Route: {execution.route_name or execution.route_id}"
        self.query_one("#run-route", Static).update(route)
        self.query_one("#run-status", Static).update(format_status(state))
        error = state.error
        self.query_one("#run-error", Static).update(
            f"{error}  (press x to dismiss)" if error else ""
        )
        self.query_one("#btn-pause", Button).disabled = not state.can("pause")
        self.query_one("#btn-resume", Button).disabled = not state.can("resume")
        self.query_one("#btn-finish", Button).disabled = not state.can("finish")
        self._ticker.follow(state.status)
        self._tick()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-pause":
            self.action_pause()
        elif event.button.id == "btn-resume":
            self.action_resume()
        elif event.button.id == "btn-finish":
            self.action_finish()

    def action_pause(self) -> None:
        if self.fitrun_app.controller.state.can("pause"):
            self._send("pause")

    def action_resume(self) -> None:
        if self.fitrun_app.controller.state.can("resume"):
            self._send("resume")

    @work(exclusive=False, group="command")
    async def _send(self, command: str) -> None:
        controller = self.fitrun_app.controller
        try:
            if command == "pause":
                await controller.pause()
            else:
                await controller.resume()
        except FitrunError:
            # The controller keeps the message for the inline error line
            return

    def action_dismiss_error(self) -> None:
        self.fitrun_app.controller.dismiss_error()

    def action_finish(self) -> None:
        controller = self.fitrun_app.controller
        if not controller.state.can("finish"):
            return
        self._flow = FinishFlow(controller, on_return_home=self._go_home)
        execution = controller.execution
        activity = execution.activity_type if execution else None
        if activity not in KNOWN_ACTIVITIES:
            activity = None
        self.app.push_screen(FinishModal(self._flow, activity), self._show_score)

    def _show_score(self, result: ScoreResult | None) -> None:
        if result is None:
            self._flow = None
            return
        self.app.push_screen(ScoreModal(result), self._leave_score)

    def _leave_score(self, _: None) -> None:
        if self._flow is not None:
            self._flow.return_home()

    def _go_home(self) -> None:
        logger.info("Score dismissed, returning home")
        self._flow = None
        self.app.pop_screen()

    def action_back(self) -> None:
        self.app.pop_screen()

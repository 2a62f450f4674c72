"""Landing screen: start a new run or resume the unfinished one."""

import logging
from typing import TYPE_CHECKING, cast

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Static

from fitrun.dashboard import build_kpi_summary, build_points_line
from fitrun.errors import AuthError, FitrunError
from fitrun.models.execution import Execution, ExecutionStatus
from fitrun.tui.screens.active_run import ActiveRunScreen
from fitrun.tui.screens.start import StartModal, StartRequest

if TYPE_CHECKING:
    from fitrun.tui.app import FitrunApp

logger = logging.getLogger(__name__)


def describe_active(execution: Execution | None) -> str:
    """Home status line for the cached active pointer."""
    if execution is None:
        return "No activity in progress. Press 's' to start one."
    route = execution.route_name or execution.route_id
    state = "paused" if execution.status == ExecutionStatus.PAUSED else "in progress"
    return f"Unfinished activity on {route} ({state}). Press 'r' to resume."


class HomeScreen(Screen):
    """Landing view. Checks for an unfinished execution on every visit."""

    BINDINGS = [
        Binding("s", "start", "Start", show=True),
        Binding("r", "resume", "Resume", show=True),
        Binding("g", "refresh", "Refresh", show=True),
    ]

    DEFAULT_CSS = """
    HomeScreen > Vertical {
        padding: 1 2;
        height: auto;
    }

    HomeScreen .home-title {
        text-style: bold;
        padding-bottom: 1;
    }

    HomeScreen #home-status {
        padding-bottom: 1;
        color: $text-muted;
    }

    HomeScreen #home-kpis, HomeScreen #home-points {
        color: $text-muted;
    }

    HomeScreen #home-points {
        padding-bottom: 1;
    }

    HomeScreen .button-row Button {
        margin: 0 1 0 0;
    }
    """

    @property
    def fitrun_app(self) -> "FitrunApp":
        return cast("FitrunApp", self.app)

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical():
            yield Static("fitrun", classes="home-title")
            yield Static("", id="home-kpis")
            yield Static("", id="home-points")
            yield Static("", id="home-status")
            with Horizontal(classes="button-row"):
                yield Button("Start new run", id="btn-start", variant="success")
                yield Button("Resume run", id="btn-resume", variant="primary")
        yield Footer()

    def on_mount(self) -> None:
        self.app.sub_title = "Home"
        self._refresh_all()

    def on_screen_resume(self) -> None:
        self._refresh_all()

    def _refresh_all(self) -> None:
        self.refresh_active()
        self.refresh_dashboard()

    @work(exclusive=True, group="guard")
    async def refresh_active(self) -> None:
        """Ask the guard whether an execution is still open."""
        session = self.fitrun_app.session
        status = self.query_one("#home-status", Static)
        if not session.is_authenticated:
            status.update("Not logged in. Run 'fitrun login EMAIL' first.")
            self._set_buttons(start=False, resume=False)
            return
        status.update("Checking for an unfinished activity...")
        await self.fitrun_app.guard.check()
        self._render_active()

    @work(exclusive=True, group="dashboard")
    async def refresh_dashboard(self) -> None:
        """Load today's KPIs and the points total; failures stay inline."""
        if not self.fitrun_app.session.is_authenticated:
            return
        api = self.fitrun_app.api
        kpis_line = self.query_one("#home-kpis", Static)
        points_line = self.query_one("#home-points", Static)
        try:
            kpis_line.update(build_kpi_summary(await api.get_home_kpis()))
        except AuthError:
            kpis_line.update("")
            return
        except FitrunError as e:
            logger.warning("Home KPIs unavailable: %s", e)
            kpis_line.update(f"Today's KPIs unavailable: {e}")
        try:
            points_line.update(build_points_line(await api.get_profile()))
        except FitrunError as e:
            logger.warning("Profile points unavailable: %s", e)
            points_line.update(f"Points unavailable: {e}")

    def _render_active(self) -> None:
        active = self.fitrun_app.guard.active
        self.query_one("#home-status", Static).update(describe_active(active))
        self._set_buttons(start=active is None, resume=active is not None)

    def _set_buttons(self, *, start: bool, resume: bool) -> None:
        self.query_one("#btn-start", Button).disabled = not start
        self.query_one("#btn-resume", Button).disabled = not resume

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-start":
            self.action_start()
        elif event.button.id == "btn-resume":
            self.action_resume()

    def action_refresh(self) -> None:
        self._refresh_all()

    def action_start(self) -> None:
        if not self.fitrun_app.session.is_authenticated:
            return
        if self.fitrun_app.guard.active is not None:
            self.notify("Finish or resume your current activity first")
            return
        self.app.push_screen(StartModal(), self._handle_start_request)

    def _handle_start_request(self, request: StartRequest | None) -> None:
        if request is None:
            return
        self._start_run(request)

    @work(exclusive=True, group="command")
    async def _start_run(self, request: StartRequest) -> None:
        controller = self.fitrun_app.controller
        try:
            await controller.start(request.route_id, request.activity_type)
        except FitrunError as e:
            logger.warning("Start from home failed: %s", e)
            self.notify(f"Could not start: {e}", severity="error")
            self._render_active()
            return
        self.app.push_screen(ActiveRunScreen())

    def action_resume(self) -> None:
        active = self.fitrun_app.guard.active
        if active is None:
            return
        self.fitrun_app.controller.adopt(active)
        self.app.push_screen(ActiveRunScreen())

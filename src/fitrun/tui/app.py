"""Main fitrun TUI application."""

import logging
from typing import Any

from textual.app import App
from textual.binding import Binding

from fitrun.api.client import FitnessApiClient, ServiceApi
from fitrun.config import settings
from fitrun.execution.controller import ExecutionController
from fitrun.execution.guard import ActiveExecutionGuard
from fitrun.session.state import Session, start_session

logger = logging.getLogger(__name__)


class FitrunApp(App[None]):
    """Main fitrun TUI application."""

    TITLE = "fitrun"
    SUB_TITLE = "Routes, runs and points"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
    ]

    CSS = """
    Screen {
        background: $surface;
    }
    """

    def __init__(
        self,
        *,
        api: ServiceApi | None = None,
        session: Session | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.session = session or start_session()
        self._owns_api = api is None
        self.api: ServiceApi = api or FitnessApiClient.for_session(
            self.session, on_auth_error=self._on_session_expired
        )
        self.guard = ActiveExecutionGuard(self.api, self.session)
        self.controller = ExecutionController(self.api, self.guard)

    def on_mount(self) -> None:
        """Start on the home screen."""
        self.theme = settings.theme

        from fitrun.tui.screens.home import HomeScreen

        self.push_screen(HomeScreen())

    async def on_unmount(self) -> None:
        if self._owns_api and isinstance(self.api, FitnessApiClient):
            await self.api.aclose()

    def _on_session_expired(self) -> None:
        logger.warning("Credential rejected; session cleared")
        self.notify(
            "Your session has expired. Run 'fitrun login' again.",
            severity="error",
        )

"""Modal collecting finishing metadata and submitting the finish."""

import logging

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static

from fitrun.errors import FitrunError, ValidationError
from fitrun.execution.presenter import FinishFlow, FinishForm, FinishStage, ScoreResult
from fitrun.tui.screens.start import activity_options, selected_activity

logger = logging.getLogger(__name__)


class FinishModal(ModalScreen[ScoreResult | None]):
    """Collect activity type and notes, then finish the execution."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    FinishModal {
        align: center middle;
        background: $background 60%;
    }

    FinishModal > Vertical {
        width: 60;
        height: auto;
        background: $surface;
        border: solid $surface-lighten-2;
        padding: 1 2;
    }

    FinishModal .modal-title {
        text-style: bold;
        padding-bottom: 1;
    }

    FinishModal #finish-error {
        color: $error;
        height: auto;
    }

    FinishModal .modal-actions {
        align: right middle;
        height: auto;
        margin-top: 1;
    }

    FinishModal .modal-actions Button {
        margin-left: 1;
    }
    """

    def __init__(
        self,
        flow: FinishFlow,
        activity_type: str | None = None,
        **kwargs: object,
    ) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self.flow = flow
        self._initial_activity = activity_type

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Finish activity", classes="modal-title")
            yield Label("Activity")
            if self._initial_activity:
                yield Select(
                    activity_options(),
                    prompt="Choose an activity",
                    value=self._initial_activity,
                    id="activity-select",
                )
            else:
                yield Select(
                    activity_options(),
                    prompt="Choose an activity",
                    id="activity-select",
                )
            yield Label("Notes")
            yield Input(placeholder="How did it go? (optional)", id="notes-input")
            yield Static("", id="finish-error")
            with Horizontal(classes="modal-actions"):
                yield Button("Cancel", id="btn-cancel")
                yield Button("Finish", id="btn-confirm", variant="error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-confirm":
            self._confirm()
        elif event.button.id == "btn-cancel":
            self.action_cancel()

    def _confirm(self) -> None:
        if self.flow.stage != FinishStage.COLLECTING:
            return
        form = FinishForm(
            activity_type=selected_activity(
                self.query_one("#activity-select", Select).value
            ),
            notes=self.query_one("#notes-input", Input).value,
        )
        try:
            form.validate()
        except ValidationError as e:
            self._show_error(e.message)
            return
        self._submit(form)

    @work(exclusive=True, group="finish")
    async def _submit(self, form: FinishForm) -> None:
        self._set_busy(True)
        self._show_error("")
        try:
            result = await self.flow.submit(form)
        except FitrunError as e:
            logger.info("Finish not accepted: %s", e)
            self._set_busy(False)
            self._show_error(self.flow.error or str(e))
            return
        if result is not None:
            self.dismiss(result)

    def _set_busy(self, busy: bool) -> None:
        self.query_one("#btn-confirm", Button).disabled = busy
        self.query_one("#btn-cancel", Button).disabled = busy

    def _show_error(self, message: str) -> None:
        self.query_one("#finish-error", Static).update(message)

    def action_cancel(self) -> None:
        if self.flow.stage == FinishStage.SUBMITTING:
            return
        self.dismiss(None)

"""Modal for choosing a route and activity before starting."""

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static

from fitrun.errors import ValidationError
from fitrun.models.execution import ActivityType, coerce_activity_type


def activity_options() -> list[tuple[str, str]]:
    return [(activity.label, activity.value) for activity in ActivityType]


def selected_activity(value: object) -> str | None:
    """Select's blank sentinel is not a string."""
    return value if isinstance(value, str) else None


@dataclass(frozen=True, slots=True)
class StartRequest:
    route_id: str
    activity_type: ActivityType


def build_start_request(route_id: str, activity: str | None) -> StartRequest:
    """Validate the modal's inputs.

    Raises:
        ValidationError: If the route or activity type is missing.
    """
    route = route_id.strip()
    if not route:
        raise ValidationError("route_id", "Route is required")
    return StartRequest(route_id=route, activity_type=coerce_activity_type(activity))


class StartModal(ModalScreen[StartRequest | None]):
    """Ask for the route and activity type."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    StartModal {
        align: center middle;
        background: $background 60%;
    }

    StartModal > Vertical {
        width: 60;
        height: auto;
        background: $surface;
        border: solid $surface-lighten-2;
        padding: 1 2;
    }

    StartModal .modal-title {
        text-style: bold;
        padding-bottom: 1;
    }

    StartModal #start-error {
        color: $error;
        height: auto;
    }

    StartModal .modal-actions {
        align: right middle;
        height: auto;
        margin-top: 1;
    }

    StartModal .modal-actions Button {
        margin-left: 1;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Start a run", classes="modal-title")
            yield Label("Route")
            yield Input(placeholder="Route id", id="route-input")
            yield Label("Activity")
            yield Select(
                activity_options(), prompt="Choose an activity", id="activity-select"
            )
            yield Static("", id="start-error")
            with Horizontal(classes="modal-actions"):
                yield Button("Cancel", id="btn-cancel")
                yield Button("Start", id="btn-confirm", variant="success")

    def on_mount(self) -> None:
        self.query_one("#route-input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-confirm":
            self._confirm()
        elif event.button.id == "btn-cancel":
            self.action_cancel()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._confirm()

    def _confirm(self) -> None:
        route = self.query_one("#route-input", Input).value
        activity = selected_activity(self.query_one("#activity-select", Select).value)
        try:
            request = build_start_request(route, activity)
        except ValidationError as e:
            self.query_one("#start-error", Static).update(e.message)
            return
        self.dismiss(request)

    def action_cancel(self) -> None:
        self.dismiss(None)

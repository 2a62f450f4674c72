"""Score view shown after a successful finish."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from fitrun.execution.presenter import ScoreResult, build_result_message


class ScoreModal(ModalScreen[None]):
    """Shows points, calories and the goal message.

    There is no automatic dismissal; only "Return home" leaves.
    """

    BINDINGS = [
        Binding("enter", "return_home", "Return home", show=True),
    ]

    DEFAULT_CSS = """
    ScoreModal {
        align: center middle;
        background: $background 60%;
    }

    ScoreModal > Vertical {
        width: 56;
        height: auto;
        background: $surface;
        border: solid $success;
        padding: 1 2;
    }

    ScoreModal #score-icon {
        text-align: center;
    }

    ScoreModal #score-points {
        text-align: center;
        text-style: bold;
        padding-bottom: 1;
    }

    ScoreModal .score-detail {
        color: $text-muted;
    }

    ScoreModal #score-message {
        padding-top: 1;
    }

    ScoreModal .modal-actions {
        align: center middle;
        height: auto;
        margin-top: 1;
    }
    """

    def __init__(self, result: ScoreResult, **kwargs: object) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self.result = result

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(self.result.icon, id="score-icon")
            yield Static(f"{self.result.points} PTS", id="score-points")
            yield Static(f"Duration: {self.result.duration}", classes="score-detail")
            yield Static(
                f"Calories: {self.result.calories} kcal", classes="score-detail"
            )
            yield Static(build_result_message(self.result), id="score-message")
            with Horizontal(classes="modal-actions"):
                yield Button("Return home", id="btn-home", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-home":
            self.action_return_home()

    def action_return_home(self) -> None:
        self.dismiss(None)

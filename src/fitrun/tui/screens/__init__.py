"""TUI screens for the run lifecycle."""

from .active_run import ActiveRunScreen
from .finish import FinishModal
from .home import HomeScreen
from .score import ScoreModal
from .start import StartModal, StartRequest

__all__ = [
    "ActiveRunScreen",
    "FinishModal",
    "HomeScreen",
    "ScoreModal",
    "StartModal",
    "StartRequest",
]

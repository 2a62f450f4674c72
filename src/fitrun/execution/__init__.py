"""Execution lifecycle and scoring engine."""

from .controller import COMMAND_SOURCES, ExecutionController, RunState
from .elapsed import ElapsedClock, elapsed_seconds, format_duration, utc_now
from .guard import ActiveExecutionGuard
from .presenter import (
    FinishFlow,
    FinishForm,
    FinishStage,
    ScoreResult,
    build_result_lines,
    build_result_message,
    is_goal_exceeded,
    load_calorie_goal,
)
from .ticker import Ticker, TimerHandle

__all__ = [
    "COMMAND_SOURCES",
    "ActiveExecutionGuard",
    "ElapsedClock",
    "ExecutionController",
    "FinishFlow",
    "FinishForm",
    "FinishStage",
    "RunState",
    "ScoreResult",
    "Ticker",
    "TimerHandle",
    "build_result_lines",
    "build_result_message",
    "elapsed_seconds",
    "format_duration",
    "is_goal_exceeded",
    "load_calorie_goal",
    "utc_now",
]

"""Finish flow and score presentation.

Finishing is a two-stage sequence: collect the finishing metadata, then
show the server's score. Leaving the score is always an explicit user
action, and that action is what clears the session's active pointer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from fitrun.errors import (
    CommandPendingError,
    FitrunError,
    InvalidTransitionError,
    ValidationError,
)
from fitrun.execution.controller import ExecutionController
from fitrun.models.execution import ActivityType, coerce_activity_type

logger = logging.getLogger(__name__)

GOAL_EXCEEDED_ICON = "🏆"
STANDARD_ICON = "🏁"


class FinishStage(Enum):
    """Where the finish flow currently is."""

    COLLECTING = "collecting"
    SUBMITTING = "submitting"
    RESULT = "result"
    CLOSED = "closed"


@dataclass(frozen=True, slots=True)
class FinishForm:
    """Values entered in the collection stage."""

    activity_type: ActivityType | str | None = None
    notes: str = ""

    def validate(self) -> ActivityType:
        """Return the chosen activity type or raise ``ValidationError``."""
        return coerce_activity_type(self.activity_type)


def is_goal_exceeded(calories: int, goal_kcal_daily: int | None) -> bool:
    """Bonus rule: only a positive goal can be met or exceeded."""
    if goal_kcal_daily is None or goal_kcal_daily <= 0:
        return False
    return calories >= goal_kcal_daily


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Authoritative outcome of a finished execution."""

    execution_id: str
    points: int
    calories: int
    duration: str
    goal_kcal_daily: int | None = None

    @property
    def goal_exceeded(self) -> bool:
        return is_goal_exceeded(self.calories, self.goal_kcal_daily)

    @property
    def icon(self) -> str:
        return GOAL_EXCEEDED_ICON if self.goal_exceeded else STANDARD_ICON


def build_result_message(result: ScoreResult) -> str:
    """Narrative shown under the score."""
    if result.goal_exceeded:
        return (
            f"Goal exceeded! You burned {result.calories} kcal, "
            f"beating your daily goal of {result.goal_kcal_daily} kcal."
        )
    return f"Activity complete. You burned {result.calories} kcal."


def build_result_lines(result: ScoreResult) -> list[str]:
    """Plain-text rendering of the score, used by the CLI."""
    return [
        f"{result.icon}  {result.points} PTS",
        f"Duration: {result.duration}",
        f"Calories: {result.calories} kcal",
        build_result_message(result),
    ]


async def load_calorie_goal(controller: ExecutionController) -> int | None:
    """Daily calorie goal, or None when the profile cannot be loaded.

    Best effort: the score is shown whatever goes wrong here.
    """
    try:
        profile = await controller.api.get_profile()
    except Exception as e:
        logger.warning("Profile unavailable, showing score without goal: %s", e)
        return None
    return profile.goal_kcal_daily if profile.has_calorie_goal else None


class FinishFlow:
    """Drives the collection and result stages for one execution."""

    def __init__(
        self,
        controller: ExecutionController,
        *,
        on_return_home: Callable[[], None] | None = None,
    ) -> None:
        self.controller = controller
        self._on_return_home = on_return_home
        self.stage = FinishStage.COLLECTING
        self.result: ScoreResult | None = None
        self.error: str | None = None
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Mark the owning view as gone; late results will be dropped."""
        self._disposed = True

    async def submit(self, form: FinishForm) -> ScoreResult | None:
        """Validate, finish the execution and build the score.

        Returns:
            The score, or None when the flow was disposed while waiting.

        Raises:
            ValidationError: If no valid activity type was chosen.
            FitrunError: If the finish command failed; the flow stays in
                the collection stage so the user can resubmit.
        """
        if self.stage == FinishStage.SUBMITTING:
            raise CommandPendingError("finish")
        if self.stage != FinishStage.COLLECTING:
            raise InvalidTransitionError(None, "finish")

        try:
            activity = form.validate()
        except ValidationError as e:
            self.error = e.message
            raise

        self.stage = FinishStage.SUBMITTING
        self.error = None
        try:
            execution = await self.controller.finish(activity, form.notes)
        except FitrunError as e:
            self.stage = FinishStage.COLLECTING
            self.error = str(e)
            raise
        except BaseException:
            self.stage = FinishStage.COLLECTING
            raise

        if self._disposed:
            logger.info("Discarding finish result for %s after teardown", execution.id)
            return None

        goal = await load_calorie_goal(self.controller)
        if self._disposed:
            logger.info("Discarding finish result for %s after teardown", execution.id)
            return None

        if execution.points is None or execution.calories is None:
            logger.warning("Finish response for %s lacks a score", execution.id)

        self.result = ScoreResult(
            execution_id=execution.id,
            points=execution.points or 0,
            calories=execution.calories or 0,
            duration=self.controller.elapsed.display(),
            goal_kcal_daily=goal,
        )
        self.stage = FinishStage.RESULT
        logger.info(
            "Execution %s scored %d points, %d kcal (goal exceeded: %s)",
            execution.id,
            self.result.points,
            self.result.calories,
            self.result.goal_exceeded,
        )
        return self.result

    def return_home(self) -> None:
        """Leave the score: clear the active pointer and go to the landing view."""
        if self.stage != FinishStage.RESULT:
            raise InvalidTransitionError(None, "return home")
        self.controller.guard.clear()
        self.controller.adopt(None)
        self.stage = FinishStage.CLOSED
        if self._on_return_home is not None:
            self._on_return_home()

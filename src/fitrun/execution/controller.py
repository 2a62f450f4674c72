"""Execution state machine: start, pause, resume and finish commands."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from typing import TypeAlias

from fitrun.api.client import ExecutionApi
from fitrun.errors import (
    ActiveExecutionExistsError,
    CommandPendingError,
    FitrunError,
    InvalidTransitionError,
    ValidationError,
)
from fitrun.execution.elapsed import Clock, ElapsedClock, utc_now
from fitrun.execution.guard import ActiveExecutionGuard
from fitrun.models.execution import (
    ActivityType,
    Execution,
    ExecutionStatus,
    coerce_activity_type,
)

logger = logging.getLogger(__name__)

RunStateListener: TypeAlias = "Callable[[RunState], None]"

# Statuses each command may be issued from
COMMAND_SOURCES: dict[str, frozenset[ExecutionStatus]] = {
    "pause": frozenset({ExecutionStatus.IN_PROGRESS}),
    "resume": frozenset({ExecutionStatus.PAUSED}),
    "finish": frozenset({ExecutionStatus.IN_PROGRESS, ExecutionStatus.PAUSED}),
}


@dataclass(frozen=True, slots=True)
class RunState:
    """Snapshot of what the run view should show."""

    execution: Execution | None = None
    pending: str | None = None
    error: str | None = None

    @property
    def status(self) -> ExecutionStatus | None:
        return self.execution.status if self.execution else None

    @property
    def busy(self) -> bool:
        return self.pending is not None

    def can(self, command: str) -> bool:
        """Whether the control for ``command`` should be enabled."""
        if self.busy or self.status is None:
            return False
        return self.status in COMMAND_SOURCES[command]


class ExecutionController:
    """Issues lifecycle commands and applies only server-confirmed results.

    There is no optimistic update: the status changes when the response
    arrives. While a command is pending every other command is refused.
    A failed command leaves the status untouched and records an inline,
    dismissible error before re-raising.
    """

    def __init__(
        self,
        api: ExecutionApi,
        guard: ActiveExecutionGuard,
        clock: Clock = utc_now,
    ) -> None:
        self.api = api
        self.guard = guard
        self.elapsed = ElapsedClock(clock)
        self._state = RunState()
        self._listeners: list[RunStateListener] = []

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def execution(self) -> Execution | None:
        return self._state.execution

    @property
    def pending(self) -> bool:
        return self._state.busy

    @property
    def error(self) -> str | None:
        return self._state.error

    def subscribe(self, listener: RunStateListener) -> Callable[[], None]:
        """Register a state listener; returns its unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def close(self) -> None:
        """Drop all listeners (view teardown)."""
        self._listeners.clear()

    def _set_state(self, **changes: object) -> None:
        self._state = replace(self._state, **changes)  # type: ignore[arg-type]
        for listener in list(self._listeners):
            listener(self._state)

    def adopt(self, execution: Execution | None) -> None:
        """Take over an execution discovered by the guard."""
        self.elapsed.sync(execution)
        self._set_state(execution=execution, pending=None, error=None)
        if execution is not None:
            logger.info(
                "Managing execution %s (%s)", execution.id, execution.status.value
            )

    def dismiss_error(self) -> None:
        if self._state.error is not None:
            self._set_state(error=None)

    def _require(self, command: str) -> Execution:
        if self._state.pending is not None:
            raise CommandPendingError(self._state.pending)
        execution = self._state.execution
        if execution is None or execution.status not in COMMAND_SOURCES[command]:
            raise InvalidTransitionError(
                execution.status if execution else None, command
            )
        return execution

    async def _run(
        self, command: str, call: Callable[[], Awaitable[Execution]]
    ) -> Execution:
        self._set_state(pending=command, error=None)
        try:
            result = await call()
        except FitrunError as e:
            logger.warning("%s failed: %s", command, e)
            self._set_state(pending=None, error=str(e))
            raise
        except BaseException:
            self._set_state(pending=None)
            raise

        self.elapsed.sync(result)
        self._set_state(execution=result, pending=None, error=None)
        logger.info("%s confirmed: %s is %s", command, result.id, result.status.value)
        return result

    async def start(
        self, route_id: str, activity_type: ActivityType | str
    ) -> Execution:
        """Start a new execution on ``route_id``.

        Raises:
            ActiveExecutionExistsError: If the guard knows of an unfinished
                execution.
            ValidationError: If the route or activity type is missing.
        """
        if self._state.pending is not None:
            raise CommandPendingError(self._state.pending)
        active = self.guard.active or self._state.execution
        if active is not None and active.is_active:
            raise ActiveExecutionExistsError(active.id)
        if not route_id or not route_id.strip():
            raise ValidationError("route_id", "Route is required")
        activity = coerce_activity_type(activity_type)

        result = await self._run(
            "start",
            lambda: self.api.start_execution(route_id.strip(), activity.value),
        )
        self.guard.track(result)
        return result

    async def pause(self) -> Execution:
        execution = self._require("pause")
        result = await self._run(
            "pause", lambda: self.api.pause_execution(execution.id)
        )
        self.guard.track(result)
        return result

    async def resume(self) -> Execution:
        execution = self._require("resume")
        result = await self._run(
            "resume", lambda: self.api.resume_execution(execution.id)
        )
        self.guard.track(result)
        return result

    async def finish(
        self, activity_type: ActivityType | str, notes: str | None = None
    ) -> Execution:
        """Finish the managed execution.

        The guard's pointer is left alone; the score view clears it once
        the user has seen the result.
        """
        execution = self._require("finish")
        activity = coerce_activity_type(activity_type)
        cleaned_notes = notes.strip() if notes else None
        return await self._run(
            "finish",
            lambda: self.api.finish_execution(
                execution.id, activity.value, cleaned_notes
            ),
        )

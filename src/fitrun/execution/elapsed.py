"""Elapsed-time accounting for a running execution.

Elapsed time is always recomputed from the server baseline
(``start_time`` and ``total_paused_time_sec``), never accumulated tick by
tick, so skipped or delayed ticks cannot make the display drift.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import TypeAlias

from fitrun.models.execution import Execution, ExecutionStatus

Clock: TypeAlias = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def elapsed_seconds(
    now: datetime, start_time: datetime, total_paused_time_sec: int
) -> int:
    """Active seconds between ``start_time`` and ``now``, never negative."""
    raw = (now - start_time).total_seconds() - total_paused_time_sec
    return max(0, int(raw))


def format_duration(total_seconds: int) -> str:
    """Format seconds as ``HH:MM:SS``; hours grow past 24 unbounded."""
    hours, rem = divmod(max(0, total_seconds), 3600)
    minutes, seconds = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


class ElapsedClock:
    """Displayable duration for one execution.

    While IN_PROGRESS the value follows the live clock. While PAUSED it is
    pinned to the instant the pause took effect: the server's ``paused_at``
    when it reports one, otherwise the moment the paused snapshot was first
    observed.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._start_time: datetime | None = None
        self._total_paused_time_sec = 0
        self._status: ExecutionStatus | None = None
        self._frozen_at: datetime | None = None

    @property
    def status(self) -> ExecutionStatus | None:
        return self._status

    @property
    def frozen_at(self) -> datetime | None:
        return self._frozen_at

    def sync(self, execution: Execution | None) -> None:
        """Adopt a new server-confirmed baseline."""
        if execution is None:
            self.reset()
            return

        was_paused = self._status == ExecutionStatus.PAUSED
        self._start_time = execution.start_time
        self._total_paused_time_sec = execution.total_paused_time_sec
        self._status = execution.status

        if execution.status == ExecutionStatus.PAUSED:
            if execution.paused_at is not None:
                self._frozen_at = execution.paused_at
            elif not was_paused or self._frozen_at is None:
                self._frozen_at = self._clock()
        elif execution.status == ExecutionStatus.IN_PROGRESS:
            self._frozen_at = None
        elif self._frozen_at is None:
            # Terminal: keep whatever was last shown
            self._frozen_at = execution.end_time or self._clock()

    def reset(self) -> None:
        self._start_time = None
        self._total_paused_time_sec = 0
        self._status = None
        self._frozen_at = None

    def seconds(self) -> int:
        if self._start_time is None:
            return 0
        now = self._frozen_at or self._clock()
        return elapsed_seconds(now, self._start_time, self._total_paused_time_sec)

    def display(self) -> str:
        return format_duration(self.seconds())

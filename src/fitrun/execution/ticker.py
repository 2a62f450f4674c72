"""Timer lifecycle for the elapsed-time display."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from fitrun.models.execution import ExecutionStatus

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """Anything with ``stop()``; Textual's ``Timer`` satisfies this."""

    def stop(self) -> None: ...


class Ticker:
    """Cancellable periodic refresh, running only while IN_PROGRESS.

    ``start_timer`` schedules the periodic callback and returns its handle.
    Leaving IN_PROGRESS cancels the handle outright; a later resume
    schedules a fresh one.
    """

    def __init__(self, start_timer: Callable[[], TimerHandle]) -> None:
        self._start_timer = start_timer
        self._handle: TimerHandle | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        if self._handle is not None:
            return
        self._handle = self._start_timer()
        logger.debug("Elapsed ticker started")

    def cancel(self) -> None:
        if self._handle is None:
            return
        self._handle.stop()
        self._handle = None
        logger.debug("Elapsed ticker cancelled")

    def follow(self, status: ExecutionStatus | None) -> None:
        """Start or cancel according to the execution status."""
        if status == ExecutionStatus.IN_PROGRESS:
            self.start()
        else:
            self.cancel()

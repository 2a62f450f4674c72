"""Discovery of the user's unfinished execution."""

from __future__ import annotations

import logging

from fitrun.api.client import ExecutionApi
from fitrun.models.execution import Execution
from fitrun.session.state import Session

logger = logging.getLogger(__name__)


class ActiveExecutionGuard:
    """Answers "does this user have an unfinished execution?".

    The answer is cached on the session as the active pointer. The check is
    a best-effort background reconciliation: it never raises, and any
    failure is read as "no active execution".
    """

    def __init__(self, api: ExecutionApi, session: Session) -> None:
        self.api = api
        self.session = session
        self._in_flight = False
        self.conflicts: tuple[str, ...] = ()

    @property
    def active(self) -> Execution | None:
        return self.session.active_execution

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def check(self) -> Execution | None:
        """Refresh the active pointer from the server.

        Returns immediately, without a request, if a check is already
        running.
        """
        if self._in_flight:
            logger.debug("Active execution check already in flight")
            return self.active

        self._in_flight = True
        try:
            executions = await self.api.list_executions()
        except Exception as e:
            logger.warning("Active execution check failed, assuming none: %s", e)
            self.conflicts = ()
            self.session.set_active_execution(None)
            return None
        finally:
            self._in_flight = False

        active = [ex for ex in executions if ex.is_active]
        if len(active) > 1:
            self.conflicts = tuple(ex.id for ex in active)
            logger.error(
                "Integrity violation: %d active executions (%s); using %s",
                len(active),
                ", ".join(self.conflicts),
                active[0].id,
            )
        else:
            self.conflicts = ()

        found = active[0] if active else None
        self.session.set_active_execution(found)
        logger.info(
            "Active execution check: %s",
            f"{found.id} ({found.status.value})" if found else "none",
        )
        return found

    def track(self, execution: Execution) -> None:
        """Record a server-confirmed execution returned by a command."""
        if execution.is_active:
            self.session.set_active_execution(execution)
        else:
            self.clear()

    def clear(self) -> None:
        self.conflicts = ()
        self.session.clear_active_execution()

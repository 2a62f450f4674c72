"""Process-wide session: credentials plus the cached active-execution pointer.

The session has an explicit lifecycle. ``start_session()`` creates it when
the app boots, ``end_session()`` tears it down on logout. In between, the
active pointer changes only through ``set_active_execution`` and
``clear_active_execution``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeAlias

from fitrun.models.execution import Execution
from fitrun.session.credentials import CredentialStore

logger = logging.getLogger(__name__)

ActiveExecutionListener: TypeAlias = Callable[[Execution | None], None]


class Session:
    """State shared by every screen and command in one process."""

    def __init__(self, credentials: CredentialStore) -> None:
        self.credentials = credentials
        self._active_execution: Execution | None = None
        self._listeners: list[ActiveExecutionListener] = []

    @property
    def active_execution(self) -> Execution | None:
        return self._active_execution

    @property
    def token(self) -> str | None:
        return self.credentials.token

    @property
    def is_authenticated(self) -> bool:
        return self.credentials.token is not None

    def subscribe(self, listener: ActiveExecutionListener) -> Callable[[], None]:
        """Register a listener for active pointer changes.

        Returns:
            Callable that removes the listener again.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._active_execution)

    def set_active_execution(self, execution: Execution | None) -> None:
        if execution == self._active_execution:
            return
        self._active_execution = execution
        self._notify()

    def clear_active_execution(self) -> None:
        self.set_active_execution(None)

    def login(self, token: str, profile_exists: bool) -> None:
        """Persist a freshly issued credential."""
        self.credentials.save(token, profile_exists)

    def logout(self) -> None:
        """Drop credentials and any cached execution pointer."""
        self.credentials.clear()
        self.clear_active_execution()


# Singleton instance
_session: Session | None = None


def start_session(credentials: CredentialStore | None = None) -> Session:
    """Create the process-wide session (idempotent)."""
    global _session
    if _session is None:
        _session = Session(credentials or CredentialStore())
        logger.info(
            "Session started (authenticated=%s)", _session.is_authenticated
        )
    return _session


def get_session() -> Session:
    """Return the running session, starting one if needed."""
    return start_session()


def end_session() -> None:
    """Log out and discard the process-wide session."""
    global _session
    if _session is not None:
        _session.logout()
        logger.info("Session ended")
    _session = None


def reset_session() -> None:
    """Discard the singleton without touching persisted credentials (tests)."""
    global _session
    _session = None

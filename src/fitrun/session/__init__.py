"""Session lifecycle and persisted credentials."""

from .credentials import CredentialStore
from .state import (
    Session,
    end_session,
    get_session,
    reset_session,
    start_session,
)

__all__ = [
    "CredentialStore",
    "Session",
    "end_session",
    "get_session",
    "reset_session",
    "start_session",
]

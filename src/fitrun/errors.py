"""Error taxonomy shared by the API client and the execution engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fitrun.models.execution import ExecutionStatus


class FitrunError(Exception):
    """Base class for all fitrun errors."""


class ValidationError(FitrunError):
    """Client-side input problem. Never reaches the network."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)


class ApiError(FitrunError):
    """Request to the fitness service failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class AuthError(ApiError):
    """Credential rejected (HTTP 401)."""


class NotFoundError(ApiError):
    """Requested resource does not exist (HTTP 404)."""


class ServerError(ApiError):
    """Server rejected or failed the request."""


class NetworkError(ApiError):
    """Transport failure before any HTTP response was received."""


class InvalidTransitionError(FitrunError):
    """Raised when a command is not allowed from the current status."""

    def __init__(self, current: ExecutionStatus | None, command: str) -> None:
        self.current = current
        self.command = command
        label = current.value if current is not None else "no execution"
        super().__init__(f"Cannot {command} from {label}")


class ActiveExecutionExistsError(FitrunError):
    """A second execution cannot start while one is active."""

    def __init__(self, execution_id: str) -> None:
        self.execution_id = execution_id
        super().__init__(
            f"Execution {execution_id} is still active; resume or finish it first"
        )


class CommandPendingError(FitrunError):
    """A command for this execution is still awaiting its response."""

    def __init__(self, pending: str) -> None:
        self.pending = pending
        super().__init__(f"'{pending}' is still in progress")

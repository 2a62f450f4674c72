"""HTTP client for the fitness service.

Thin async client:
- Bearer token attached from the session
- JSON error envelopes mapped onto the fitrun error taxonomy
- Rejected credentials clear the stored session
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import TYPE_CHECKING, Any, Protocol, Self

import httpx

from fitrun.config import settings
from fitrun.errors import (
    ApiError,
    AuthError,
    NetworkError,
    NotFoundError,
    ServerError,
)
from fitrun.models.execution import Execution
from fitrun.models.profile import Profile
from fitrun.models.stats import EvolutionPoint, HomeKpis, parse_evolution

if TYPE_CHECKING:
    from fitrun.session.state import Session

logger = logging.getLogger(__name__)

DEFAULT_STATS_METRIC = "kcal"
DEFAULT_STATS_PERIOD = "30d"


class ExecutionApi(Protocol):
    """Server operations the execution engine depends on."""

    async def list_executions(self) -> list[Execution]: ...

    async def start_execution(
        self, route_id: str, activity_type: str
    ) -> Execution: ...

    async def pause_execution(self, execution_id: str) -> Execution: ...

    async def resume_execution(self, execution_id: str) -> Execution: ...

    async def finish_execution(
        self, execution_id: str, activity_type: str, notes: str | None
    ) -> Execution: ...

    async def get_profile(self) -> Profile: ...


class ServiceApi(ExecutionApi, Protocol):
    """Execution operations plus the read-only dashboard endpoints."""

    async def get_home_kpis(self) -> HomeKpis: ...

    async def get_stats_evolution(
        self, metric: str = DEFAULT_STATS_METRIC, period: str = DEFAULT_STATS_PERIOD
    ) -> list[EvolutionPoint]: ...


def extract_error_message(response: httpx.Response) -> str:
    """Pull the user-facing message out of an error response body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.reason_phrase or f"HTTP {response.status_code}"


class FitnessApiClient:
    """Async client for the fitness service REST API."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        token_provider: Callable[[], str | None] | None = None,
        on_auth_error: Callable[[], None] | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token_provider = token_provider or (lambda: None)
        self._on_auth_error = on_auth_error
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout or settings.request_timeout_sec,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    @classmethod
    def for_session(
        cls,
        session: Session,
        *,
        on_auth_error: Callable[[], None] | None = None,
        **kwargs: Any,
    ) -> Self:
        """Build a client whose credentials follow the given session.

        A rejected credential logs the session out before ``on_auth_error``
        runs.
        """

        def _handle_auth_error() -> None:
            session.logout()
            if on_auth_error is not None:
                on_auth_error()

        return cls(
            token_provider=lambda: session.token,
            on_auth_error=_handle_auth_error,
            **kwargs,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        token = self._token_provider()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        logger.debug("%s %s", method, path)
        try:
            resp = await self._http.request(
                method, path, json=payload, params=params, headers=self._headers()
            )
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out: %s", method, path, e)
            raise NetworkError("The server took too long to respond") from e
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise NetworkError("Could not reach the server") from e

        if resp.is_success:
            if not resp.content:
                return None
            try:
                return resp.json()
            except ValueError as e:
                raise ServerError(
                    "Malformed response from server", resp.status_code
                ) from e

        message = extract_error_message(resp)
        logger.warning(
            "%s %s returned %d: %s", method, path, resp.status_code, message
        )
        if resp.status_code == 401:
            if self._on_auth_error is not None:
                self._on_auth_error()
            raise AuthError(message, resp.status_code)
        if resp.status_code == 404:
            raise NotFoundError(message, resp.status_code)
        raise ServerError(message, resp.status_code)

    async def _execution(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> Execution:
        data = await self._request(method, path, payload)
        if not isinstance(data, dict):
            raise ServerError("Expected an execution in the response")
        try:
            return Execution.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ServerError(f"Unexpected execution payload: {e}") from e

    # --- Auth & profile ---

    async def login(self, email: str, password: str) -> tuple[str, bool]:
        """Exchange credentials for a token.

        Returns:
            ``(token, profile_exists)``.
        """
        data = await self._request(
            "POST", "/auth/login", {"email": email, "password": password}
        )
        if not isinstance(data, dict) or not data.get("token"):
            raise ApiError("Login response did not include a token")
        return str(data["token"]), bool(data.get("profileExists", False))

    async def get_profile(self) -> Profile:
        data = await self._request("GET", "/profiles/me")
        if not isinstance(data, dict):
            raise ServerError("Expected a profile in the response")
        try:
            return Profile.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ServerError(f"Unexpected profile payload: {e}") from e

    # --- Dashboard ---

    async def get_home_kpis(self) -> HomeKpis:
        """Today's totals for the landing view."""
        data = await self._request("GET", "/home/kpis/today")
        if not isinstance(data, dict):
            raise ServerError("Expected KPIs in the response")
        try:
            return HomeKpis.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ServerError(f"Unexpected KPI payload: {e}") from e

    async def get_stats_evolution(
        self, metric: str = DEFAULT_STATS_METRIC, period: str = DEFAULT_STATS_PERIOD
    ) -> list[EvolutionPoint]:
        """Daily values of ``metric`` over ``period``, oldest first."""
        data = await self._request(
            "GET", "/stats/evolution", params={"metric": metric, "period": period}
        )
        return parse_evolution(data)

    # --- Executions ---

    async def _executions(self, path: str) -> list[Execution]:
        data = await self._request("GET", path)
        try:
            return [Execution.from_dict(item) for item in data or []]
        except (KeyError, TypeError, ValueError) as e:
            raise ServerError(f"Unexpected execution payload: {e}") from e

    async def list_executions(self) -> list[Execution]:
        return await self._executions("/executions/me")

    async def get_execution_history(self) -> list[Execution]:
        """Finished executions, newest first."""
        history = await self._executions("/executions/me/history")
        return sorted(
            history,
            key=lambda ex: ex.end_time or ex.start_time,
            reverse=True,
        )

    async def start_execution(self, route_id: str, activity_type: str) -> Execution:
        return await self._execution(
            "POST",
            f"/executions/me/start/{route_id}",
            {"activityType": activity_type},
        )

    async def pause_execution(self, execution_id: str) -> Execution:
        return await self._execution("POST", f"/executions/me/pause/{execution_id}")

    async def resume_execution(self, execution_id: str) -> Execution:
        return await self._execution("POST", f"/executions/me/resume/{execution_id}")

    async def finish_execution(
        self, execution_id: str, activity_type: str, notes: str | None
    ) -> Execution:
        return await self._execution(
            "POST",
            f"/executions/me/finish/{execution_id}",
            {"activityType": activity_type, "notes": notes or ""},
        )

from __future__ import annotations

import asyncio
import copy
from collections.abc import Iterator
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from fitrun.config.paths import reset_paths
from fitrun.config.settings import settings
from fitrun.execution.controller import ExecutionController
from fitrun.execution.guard import ActiveExecutionGuard
from fitrun.models.execution import Execution, ExecutionStatus
from fitrun.models.profile import Profile
from fitrun.models.stats import EvolutionPoint, HomeKpis
from fitrun.session.credentials import CredentialStore
from fitrun.session.state import Session, reset_session

START = datetime(2026, 5, 1, 8, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Prevent tests from persisting settings to disk."""
    original_data = copy.deepcopy(settings._data)

    def _noop_save() -> None:
        return None

    monkeypatch.setattr(settings, "_save", _noop_save)
    monkeypatch.delenv("FITRUN_API_URL", raising=False)
    try:
        yield
    finally:
        settings._data = original_data


@pytest.fixture(autouse=True)
def isolate_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point XDG state at a temp dir and drop the session singleton."""
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    reset_paths()
    reset_session()
    try:
        yield
    finally:
        reset_session()
        reset_paths()


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


def make_execution(
    status: ExecutionStatus = ExecutionStatus.IN_PROGRESS, **overrides: object
) -> Execution:
    fields: dict[str, object] = {
        "id": "ex-1",
        "route_id": "route-7",
        "status": status,
        "start_time": START,
    }
    fields.update(overrides)
    return Execution(**fields)  # type: ignore[arg-type]


class FakeExecutionApi:
    """In-memory fitness service.

    ``fail`` maps an operation name to the error it should raise.
    ``gate`` holds every call until the event is set.
    """

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.executions: list[Execution] = []
        self.calls: list[tuple[object, ...]] = []
        self.fail: dict[str, Exception] = {}
        self.gate: asyncio.Event | None = None
        self.report_paused_at = True
        self.paused_since: dict[str, datetime] = {}
        self.profile = Profile(first_name="Ana", goal_kcal_daily=500, points=42)
        self.kpis = HomeKpis(
            has_created_routes=True,
            routes_completed_today=1,
            total_duration_sec_today=3600,
            total_distance_km_today=5.0,
            active_streak_days=2,
            calories_kcal_today=320,
            goal_kcal_daily=500,
        )
        self.evolution: list[EvolutionPoint] = []
        self.points: int | None = 150
        self.calories: int | None = 600

    async def _call(self, name: str, *args: object) -> None:
        self.calls.append((name, *args))
        if self.gate is not None:
            await self.gate.wait()
        if name in self.fail:
            raise self.fail[name]

    def call_names(self) -> list[object]:
        return [call[0] for call in self.calls]

    def _find(self, execution_id: str) -> Execution:
        for execution in self.executions:
            if execution.id == execution_id:
                return execution
        raise KeyError(execution_id)

    def _store(self, execution: Execution) -> Execution:
        self.executions = [
            execution if ex.id == execution.id else ex for ex in self.executions
        ]
        return execution

    async def list_executions(self) -> list[Execution]:
        await self._call("list")
        return list(self.executions)

    async def start_execution(self, route_id: str, activity_type: str) -> Execution:
        await self._call("start", route_id, activity_type)
        execution = make_execution(
            id=f"ex-{len(self.executions) + 1}",
            route_id=route_id,
            start_time=self.clock(),
            activity_type=activity_type,
        )
        self.executions.append(execution)
        return execution

    async def pause_execution(self, execution_id: str) -> Execution:
        await self._call("pause", execution_id)
        current = self._find(execution_id)
        self.paused_since[execution_id] = self.clock()
        return self._store(
            replace(
                current,
                status=ExecutionStatus.PAUSED,
                paused_at=self.clock() if self.report_paused_at else None,
            )
        )

    async def resume_execution(self, execution_id: str) -> Execution:
        await self._call("resume", execution_id)
        current = self._find(execution_id)
        paused_for = 0
        since = self.paused_since.pop(execution_id, None)
        if since is not None:
            paused_for = int((self.clock() - since).total_seconds())
        return self._store(
            replace(
                current,
                status=ExecutionStatus.IN_PROGRESS,
                paused_at=None,
                total_paused_time_sec=current.total_paused_time_sec + paused_for,
            )
        )

    async def finish_execution(
        self, execution_id: str, activity_type: str, notes: str | None
    ) -> Execution:
        await self._call("finish", execution_id, activity_type, notes)
        current = self._find(execution_id)
        return self._store(
            replace(
                current,
                status=ExecutionStatus.FINISHED,
                end_time=self.clock(),
                activity_type=activity_type,
                notes=notes,
                points=self.points,
                calories=self.calories,
            )
        )

    async def get_profile(self) -> Profile:
        await self._call("profile")
        return self.profile

    async def get_home_kpis(self) -> HomeKpis:
        await self._call("kpis")
        return self.kpis

    async def get_stats_evolution(
        self, metric: str = "kcal", period: str = "30d"
    ) -> list[EvolutionPoint]:
        await self._call("evolution", metric, period)
        return list(self.evolution)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def api(clock: FakeClock) -> FakeExecutionApi:
    return FakeExecutionApi(clock)


@pytest.fixture
def session(tmp_path: Path) -> Session:
    session = Session(CredentialStore(tmp_path / "session.json"))
    session.login("token-123", True)
    return session


@pytest.fixture
def guard(api: FakeExecutionApi, session: Session) -> ActiveExecutionGuard:
    return ActiveExecutionGuard(api, session)


@pytest.fixture
def controller(
    api: FakeExecutionApi, guard: ActiveExecutionGuard, clock: FakeClock
) -> ExecutionController:
    return ExecutionController(api, guard, clock)

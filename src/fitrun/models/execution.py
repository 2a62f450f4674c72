"""Execution data model: one timed attempt at a route."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Self

from fitrun.errors import ValidationError

logger = logging.getLogger(__name__)


class ExecutionStatus(Enum):
    """Status of an execution as reported by the server."""

    IN_PROGRESS = "IN_PROGRESS"
    PAUSED = "PAUSED"
    FINISHED = "FINISHED"
    CANCELLED = "CANCELLED"
    FAILED = "FAILED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> ExecutionStatus | None:
        # Any status the client does not know yet is terminal
        if isinstance(value, str):
            logger.warning(
                "Unrecognised execution status %r, treating as terminal", value
            )
            return cls.UNKNOWN
        return None

    @property
    def is_active(self) -> bool:
        """Whether the execution is not yet in a terminal state."""
        return self in ACTIVE_STATUSES


ACTIVE_STATUSES: frozenset[ExecutionStatus] = frozenset(
    {ExecutionStatus.IN_PROGRESS, ExecutionStatus.PAUSED}
)


class ActivityType(Enum):
    """Activity kinds the service knows how to score."""

    WALKING_LIGHT = "WALKING_LIGHT"
    WALKING_MODERATE = "WALKING_MODERATE"
    RUNNING_LIGHT = "RUNNING_LIGHT"
    RUNNING_MODERATE = "RUNNING_MODERATE"
    RUNNING_INTENSE = "RUNNING_INTENSE"
    CYCLING_LIGHT = "CYCLING_LIGHT"
    CYCLING_MODERATE = "CYCLING_MODERATE"
    CYCLING_INTENSE = "CYCLING_INTENSE"
    HIKING_MODERATE = "HIKING_MODERATE"

    @property
    def label(self) -> str:
        """Human readable label, e.g. ``"Running (moderate)"``."""
        kind, _, intensity = self.value.partition("_")
        return f"{kind.title()} ({intensity.lower()})"


def coerce_activity_type(value: ActivityType | str | None) -> ActivityType:
    """Validate a user-chosen activity type.

    Raises:
        ValidationError: If the value is empty or not a known activity type.
    """
    if isinstance(value, ActivityType):
        return value
    if not value or not value.strip():
        raise ValidationError("activity_type", "Activity type is required")
    try:
        return ActivityType(value.strip().upper())
    except ValueError:
        raise ValidationError(
            "activity_type", f"Unknown activity type: {value}"
        ) from None


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 server timestamp into an aware UTC datetime."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    return int(value)


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


@dataclass(frozen=True, slots=True)
class Execution:
    """Server-confirmed snapshot of one execution."""

    id: str
    route_id: str
    status: ExecutionStatus
    start_time: datetime
    total_paused_time_sec: int = 0
    points: int | None = None
    calories: int | None = None
    activity_type: str | None = None
    notes: str | None = None
    end_time: datetime | None = None
    paused_at: datetime | None = None
    route_name: str | None = None
    distance_km: float | None = None
    duration_sec: int | None = None

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create from a service JSON payload."""
        start_time = parse_timestamp(data.get("startTime"))
        if start_time is None:
            raise ValueError(f"Execution {data.get('id')!r} has no startTime")
        return cls(
            id=str(data["id"]),
            route_id=str(data.get("routeId", "")),
            status=ExecutionStatus(data["status"]),
            start_time=start_time,
            total_paused_time_sec=int(data.get("totalPausedTimeSec") or 0),
            points=_optional_int(data.get("points")),
            calories=_optional_int(data.get("calories")),
            activity_type=data.get("activityType"),
            notes=data.get("notes"),
            end_time=parse_timestamp(data.get("endTime")),
            paused_at=parse_timestamp(data.get("pausedAt")),
            route_name=data.get("routeName"),
            distance_km=_optional_float(data.get("distanceKm")),
            duration_sec=_optional_int(data.get("durationSec")),
        )

"""Dashboard data: today's KPIs and the stats evolution series."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Self


def _int(value: Any) -> int:
    return int(value) if value is not None else 0


@dataclass(frozen=True, slots=True)
class HomeKpis:
    """Today's totals as computed by the server."""

    has_created_routes: bool = False
    routes_completed_today: int = 0
    total_duration_sec_today: int = 0
    total_distance_km_today: float = 0.0
    active_streak_days: int = 0
    calories_kcal_today: int = 0
    goal_kcal_daily: int | None = None

    @property
    def has_calorie_goal(self) -> bool:
        return self.goal_kcal_daily is not None and self.goal_kcal_daily > 0

    @property
    def goal_percent(self) -> int | None:
        """Share of the daily goal burned so far, or None without a goal."""
        goal = self.goal_kcal_daily
        if goal is None or goal <= 0:
            return None
        return round(self.calories_kcal_today * 100 / goal)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        goal = data.get("goalKcalDaily")
        distance = data.get("totalDistanceKmToday")
        return cls(
            has_created_routes=bool(data.get("hasCreatedRoutes", False)),
            routes_completed_today=_int(data.get("routesCompletedToday")),
            total_duration_sec_today=_int(data.get("totalDurationSecToday")),
            total_distance_km_today=float(distance) if distance is not None else 0.0,
            active_streak_days=_int(data.get("activeStreakDays")),
            calories_kcal_today=_int(data.get("caloriesKcalToday")),
            goal_kcal_daily=int(goal) if goal is not None else None,
        )


@dataclass(frozen=True, slots=True)
class EvolutionPoint:
    """One day of a metric's history."""

    date: str
    value: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Use the first numeric field other than ``date`` as the value.

        The metric's key varies (``kcal``, ``value``, ``distanceKm``...).
        """
        value: float = 0
        for key, item in data.items():
            if key == "date" or isinstance(item, bool):
                continue
            if isinstance(item, int | float):
                value = item
                break
        return cls(date=str(data.get("date", "")), value=value)


def parse_evolution(payload: Any) -> list[EvolutionPoint]:
    """Points from a ``/stats/evolution`` body; anything malformed is empty."""
    if not isinstance(payload, dict):
        return []
    points = payload.get("points")
    if not isinstance(points, list):
        return []
    return [EvolutionPoint.from_dict(p) for p in points if isinstance(p, dict)]


def has_activity(points: list[EvolutionPoint]) -> bool:
    """False for an empty series or one that is zero throughout."""
    return any(point.value > 0 for point in points)

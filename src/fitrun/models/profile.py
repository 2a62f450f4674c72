"""Profile data: name, daily calorie goal and accumulated points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Self


@dataclass(frozen=True, slots=True)
class Profile:
    """The authenticated user's profile."""

    first_name: str | None = None
    last_name: str | None = None
    goal_kcal_daily: int | None = None
    points: int | None = None

    @property
    def has_calorie_goal(self) -> bool:
        """True only when a positive daily calorie goal is configured."""
        return self.goal_kcal_daily is not None and self.goal_kcal_daily > 0

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create from a service JSON payload."""
        goal = data.get("goalKcalDaily")
        points = data.get("points")
        return cls(
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            goal_kcal_daily=int(goal) if goal is not None else None,
            points=int(points) if points is not None else None,
        )

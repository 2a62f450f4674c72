"""Data models for fitrun."""

from .execution import (
    ACTIVE_STATUSES,
    ActivityType,
    Execution,
    ExecutionStatus,
    coerce_activity_type,
    parse_timestamp,
)
from .profile import Profile
from .stats import EvolutionPoint, HomeKpis, has_activity, parse_evolution

__all__ = [
    "ACTIVE_STATUSES",
    "ActivityType",
    "EvolutionPoint",
    "Execution",
    "ExecutionStatus",
    "HomeKpis",
    "Profile",
    "coerce_activity_type",
    "has_activity",
    "parse_evolution",
    "parse_timestamp",
]

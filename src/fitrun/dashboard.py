"""Text rendering for today's KPIs, profile points and the stats evolution."""

from __future__ import annotations

from fitrun.execution.elapsed import format_duration
from fitrun.models.profile import Profile
from fitrun.models.stats import EvolutionPoint, HomeKpis, has_activity

BAR_CHAR = "█"
NO_ACTIVITY_MESSAGE = "No recent activity. Finish a run to start your history."


def format_calories(kpis: HomeKpis) -> str:
    """``"320 / 500 kcal (64%)"`` with a goal, ``"120 kcal"`` without."""
    percent = kpis.goal_percent
    if percent is None:
        return f"{kpis.calories_kcal_today} kcal"
    return f"{kpis.calories_kcal_today} / {kpis.goal_kcal_daily} kcal ({percent}%)"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def build_kpi_summary(kpis: HomeKpis) -> str:
    """Single line for the home screen."""
    parts = [
        f"Today: {format_calories(kpis)}",
        _plural(kpis.routes_completed_today, "route"),
        f"{kpis.total_distance_km_today:.2f} km",
        format_duration(kpis.total_duration_sec_today),
        f"{kpis.active_streak_days}-day streak",
    ]
    summary = " | ".join(parts)
    if not kpis.has_calorie_goal:
        summary += "  (no daily calorie goal set)"
    return summary


def build_kpi_lines(kpis: HomeKpis) -> list[str]:
    lines = [
        f"Calories today:   {format_calories(kpis)}",
        f"Routes completed: {kpis.routes_completed_today}",
        f"Time active:      {format_duration(kpis.total_duration_sec_today)}",
        f"Distance:         {kpis.total_distance_km_today:.2f} km",
        f"Streak:           {_plural(kpis.active_streak_days, 'day')}",
    ]
    if not kpis.has_calorie_goal:
        lines.append("No daily calorie goal set; add one to your profile.")
    if not kpis.has_created_routes:
        lines.append("You have not created any routes yet.")
    return lines


def build_points_line(profile: Profile) -> str:
    """Accumulated points, with the user's name when known."""
    points = profile.points or 0
    name = profile.display_name
    if name:
        return f"{name}: {points} points"
    return f"Points: {points}"


def build_evolution_lines(
    points: list[EvolutionPoint], metric: str, width: int = 30
) -> list[str]:
    """Horizontal bar per day, scaled to the busiest day."""
    if not has_activity(points):
        return [NO_ACTIVITY_MESSAGE]
    peak = max(point.value for point in points)
    lines = [f"Evolution ({metric})"]
    for point in points:
        bar = BAR_CHAR * round(point.value * width / peak)
        lines.append(f"{point.date:<10}  {bar:<{width}}  {point.value:g}")
    return lines

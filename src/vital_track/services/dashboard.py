"""Dashboard progress figures."""

from vital_track.domain.stats import DailyTotals, DashboardSummary, HealthStats

FULL_PROGRESS = 100.0


def summarize_dashboard(
    stats: HealthStats, totals: DailyTotals, step_goal: int
) -> DashboardSummary:
    """Return remaining calories and progress percentages for the day."""
    net_calories = totals.calories_in - totals.calories_out
    calorie_progress = (
        net_calories / stats.daily_calorie_target * 100
        if stats.daily_calorie_target > 0
        else 0.0
    )
    step_progress = totals.steps / step_goal * 100 if step_goal > 0 else 0.0
    return DashboardSummary(
        calories_remaining=stats.daily_calorie_target - net_calories,
        calorie_progress=_clamp_percent(calorie_progress),
        step_progress=_clamp_percent(step_progress),
    )


def _clamp_percent(value: float) -> float:
    return min(max(value, 0.0), FULL_PROGRESS)

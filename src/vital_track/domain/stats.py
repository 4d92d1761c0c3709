"""Domain models for derived statistics."""

from dataclasses import dataclass, field

from vital_track.domain.logs import ExerciseLog, FoodLog


@dataclass(frozen=True)
class Macros:
    """Daily macronutrient targets in grams."""

    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class HealthStats:
    """Targets derived from a user profile."""

    bmi: float
    bmr: int
    tdee: int
    daily_calorie_target: int
    macros: Macros


@dataclass(frozen=True)
class DailyTotals:
    """Sums of one calendar day's logs."""

    calories_in: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    calories_out: float = 0
    steps: int = 0
    recent_activities: list[FoodLog | ExerciseLog] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardSummary:
    """Progress figures shown next to the daily totals."""

    calories_remaining: float
    calorie_progress: float
    step_progress: float

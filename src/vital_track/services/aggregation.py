"""Daily aggregation of raw log collections."""

import time
from collections.abc import Iterable
from datetime import date, datetime, timedelta, tzinfo

from vital_track.domain.logs import ExerciseLog, FoodLog, StepLog
from vital_track.domain.stats import DailyTotals

RECENT_ACTIVITY_LIMIT = 3

# 9999-12-30T23:59:59.999Z: the last instant whose local day exists in every zone.
MAX_TIMESTAMP_MS = 253_402_214_399_999


def aggregate_daily_totals(
    food_logs: Iterable[FoodLog],
    exercise_logs: Iterable[ExerciseLog],
    step_logs: Iterable[StepLog],
    reference_ms: int | None = None,
    tz: tzinfo | None = None,
) -> DailyTotals:
    """Sum the logs that fall on the calendar day containing ``reference_ms``.

    The day is taken in ``tz``, or in the system's local time when ``tz`` is
    None. ``reference_ms`` defaults to the current time. Entries with equal
    timestamps keep their input order (food before exercise) in
    ``recent_activities``.
    """
    if reference_ms is None:
        reference_ms = now_ms()
    today = local_day(reference_ms, tz)

    food = [log for log in food_logs if local_day(log.timestamp, tz) == today]
    exercise = [log for log in exercise_logs if local_day(log.timestamp, tz) == today]
    steps = [log for log in step_logs if local_day(log.timestamp, tz) == today]

    activities: list[FoodLog | ExerciseLog] = [*food, *exercise]
    activities.sort(key=lambda log: log.timestamp, reverse=True)

    return DailyTotals(
        calories_in=sum(log.calories for log in food),
        protein=sum(log.protein for log in food),
        carbs=sum(log.carbs for log in food),
        fat=sum(log.fat for log in food),
        calories_out=sum(log.calories_burned for log in exercise),
        steps=sum(log.steps for log in steps),
        recent_activities=activities[:RECENT_ACTIVITY_LIMIT],
    )


def local_day(timestamp_ms: int, tz: tzinfo | None = None) -> date:
    """Return the calendar day of an epoch-millisecond timestamp in ``tz``."""
    seconds, millis = divmod(timestamp_ms, 1000)
    moment = datetime.fromtimestamp(seconds, tz=tz) + timedelta(milliseconds=millis)
    return moment.date()


def now_ms() -> int:
    """Return the current time in epoch milliseconds."""
    return time.time_ns() // 1_000_000

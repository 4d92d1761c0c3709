"""Tests for daily aggregation."""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from tests.conftest import day_start_ms
from vital_track.domain.logs import ExerciseLog, FoodLog, StepLog
from vital_track.services.aggregation import (
    MAX_TIMESTAMP_MS,
    aggregate_daily_totals,
    local_day,
)

DAY = date(2024, 3, 14)
MIDNIGHT = day_start_ms(DAY, UTC)
NOON = MIDNIGHT + 12 * 3_600_000
HOUR = 3_600_000


def _food(log_id: str, timestamp: int, calories: float = 100) -> FoodLog:
    return FoodLog(
        id=log_id,
        name=f"food-{log_id}",
        calories=calories,
        protein=10,
        carbs=20,
        fat=5,
        timestamp=timestamp,
    )


def _exercise(log_id: str, timestamp: int, burned: float = 50) -> ExerciseLog:
    return ExerciseLog(
        id=log_id,
        type="Running",
        duration=30,
        calories_burned=burned,
        timestamp=timestamp,
    )


def test_empty_collections_give_zero_totals() -> None:
    totals = aggregate_daily_totals([], [], [], reference_ms=NOON, tz=UTC)

    assert totals.calories_in == 0
    assert totals.protein == 0
    assert totals.carbs == 0
    assert totals.fat == 0
    assert totals.calories_out == 0
    assert totals.steps == 0
    assert totals.recent_activities == []


def test_sums_only_logs_from_reference_day() -> None:
    food = [
        _food("a", NOON, 500),
        _food("b", NOON + HOUR, 250),
        _food("c", NOON - 24 * HOUR),
    ]
    exercise = [_exercise("x", NOON, 300), _exercise("y", NOON + 24 * HOUR, 999)]
    steps = [
        StepLog(id="s1", steps=4000, timestamp=NOON),
        StepLog(id="s2", steps=2500, timestamp=NOON + 2 * HOUR),
        StepLog(id="s3", steps=9000, timestamp=MIDNIGHT - 1),
    ]

    totals = aggregate_daily_totals(food, exercise, steps, reference_ms=NOON, tz=UTC)

    assert totals.calories_in == 750
    assert totals.protein == 20
    assert totals.carbs == 40
    assert totals.fat == 10
    assert totals.calories_out == 300
    assert totals.steps == 6500


def test_midnight_is_included_and_previous_millisecond_excluded() -> None:
    food = [_food("midnight", MIDNIGHT), _food("before", MIDNIGHT - 1)]

    totals = aggregate_daily_totals(food, [], [], reference_ms=NOON, tz=UTC)

    assert totals.calories_in == 100
    assert [log.id for log in totals.recent_activities] == ["midnight"]


def test_next_midnight_belongs_to_next_day() -> None:
    next_midnight = day_start_ms(date(2024, 3, 15), UTC)
    food = [_food("late", next_midnight - 1), _food("tomorrow", next_midnight)]

    totals = aggregate_daily_totals(food, [], [], reference_ms=MIDNIGHT, tz=UTC)

    assert [log.id for log in totals.recent_activities] == ["late"]


def test_recent_activities_newest_first_and_capped() -> None:
    food = [_food("f1", NOON), _food("f2", NOON + 3 * HOUR)]
    exercise = [_exercise("e1", NOON + HOUR), _exercise("e2", NOON + 5 * HOUR)]

    totals = aggregate_daily_totals(food, exercise, [], reference_ms=NOON, tz=UTC)

    assert [log.id for log in totals.recent_activities] == ["e2", "f2", "e1"]


def test_recent_activities_length_is_today_count_when_small() -> None:
    food = [_food("f1", NOON), _food("old", NOON - 48 * HOUR)]
    exercise = [_exercise("e1", NOON + HOUR)]

    totals = aggregate_daily_totals(food, exercise, [], reference_ms=NOON, tz=UTC)

    assert len(totals.recent_activities) == 2


def test_day_follows_injected_timezone() -> None:
    new_york = ZoneInfo("America/New_York")
    # 02:00 UTC on the 15th is still the evening of the 14th in New York.
    late_evening = int(datetime(2024, 3, 15, 2, 0, tzinfo=UTC).timestamp() * 1000)
    reference = int(datetime(2024, 3, 14, 9, 0, tzinfo=new_york).timestamp() * 1000)

    in_new_york = aggregate_daily_totals(
        [_food("a", late_evening)], [], [], reference_ms=reference, tz=new_york
    )
    in_utc = aggregate_daily_totals(
        [_food("a", late_evening)], [], [], reference_ms=reference, tz=UTC
    )

    assert in_new_york.calories_in == 100
    assert in_utc.calories_in == 0


def test_local_time_is_used_without_timezone() -> None:
    local_midnight = day_start_ms(DAY)
    food = [_food("midnight", local_midnight), _food("before", local_midnight - 1)]

    totals = aggregate_daily_totals(food, [], [], reference_ms=local_midnight + HOUR)

    assert totals.calories_in == 100
    assert local_day(local_midnight) == DAY


def test_defaults_reference_to_now() -> None:
    now = int(datetime.now(tz=UTC).timestamp() * 1000)

    totals = aggregate_daily_totals([_food("now", now)], [], [], tz=UTC)

    assert totals.calories_in == 100


def test_latest_accepted_timestamp_has_a_day_in_every_zone() -> None:
    east = local_day(MAX_TIMESTAMP_MS, ZoneInfo("Pacific/Kiritimati"))
    west = local_day(MAX_TIMESTAMP_MS, ZoneInfo("Etc/GMT+12"))

    assert east == date(9999, 12, 31)
    assert west == date(9999, 12, 30)

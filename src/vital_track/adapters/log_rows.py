"""Row conversion shared by the tracker repositories."""

from dataclasses import asdict

from vital_track.domain.logs import (
    ExerciseLog,
    FoodLog,
    LogKind,
    StepLog,
    TrackedLog,
    WeightLog,
)
from vital_track.domain.profile import ActivityLevel, Gender, Goal, UserProfile


def log_to_row(log: TrackedLog) -> dict[str, object]:
    """Return a storable mapping for a log entry."""
    return asdict(log)


def log_from_row(kind: LogKind, row: dict[str, object]) -> TrackedLog:
    """Build a log entry of ``kind`` from a stored mapping."""
    log_id = str(row["id"])
    timestamp = int(row.get("timestamp", 0))
    if kind == LogKind.FOOD:
        return FoodLog(
            id=log_id,
            name=str(row.get("name", "")),
            calories=float(row.get("calories", 0.0)),
            protein=float(row.get("protein", 0.0)),
            carbs=float(row.get("carbs", 0.0)),
            fat=float(row.get("fat", 0.0)),
            timestamp=timestamp,
        )
    if kind == LogKind.EXERCISE:
        return ExerciseLog(
            id=log_id,
            type=str(row.get("type", "")),
            duration=float(row.get("duration", 0.0)),
            calories_burned=float(row.get("calories_burned", 0.0)),
            timestamp=timestamp,
        )
    if kind == LogKind.WEIGHT:
        return WeightLog(
            id=log_id, weight=float(row.get("weight", 0.0)), timestamp=timestamp
        )
    return StepLog(id=log_id, steps=int(row.get("steps", 0)), timestamp=timestamp)


def profile_to_row(profile: UserProfile) -> dict[str, object]:
    """Return a storable mapping for a profile."""
    return asdict(profile)


def profile_from_row(row: dict[str, object]) -> UserProfile:
    """Build a profile from a stored mapping."""
    return UserProfile(
        name=str(row.get("name", "New User")),
        age=int(row["age"]),
        gender=Gender(row["gender"]),
        height=float(row["height"]),
        current_weight=float(row["current_weight"]),
        target_weight=float(row["target_weight"]),
        activity_level=ActivityLevel(row["activity_level"]),
        goal=Goal(row["goal"]),
        step_goal=int(row["step_goal"]),
    )

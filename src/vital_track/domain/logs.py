"""Domain models for logged entries."""

from dataclasses import dataclass
from enum import StrEnum


class LogKind(StrEnum):
    """Collections a user can append entries to."""

    FOOD = "food"
    EXERCISE = "exercise"
    WEIGHT = "weight"
    STEPS = "steps"


@dataclass(frozen=True)
class FoodLog:
    """A food entry. Macros are in grams, timestamp in epoch milliseconds."""

    id: str
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    timestamp: int


@dataclass(frozen=True)
class ExerciseLog:
    """An exercise entry; duration is in minutes."""

    id: str
    type: str
    duration: float
    calories_burned: float
    timestamp: int


@dataclass(frozen=True)
class WeightLog:
    """A weigh-in in kilograms."""

    id: str
    weight: float
    timestamp: int


@dataclass(frozen=True)
class StepLog:
    """A step count entry."""

    id: str
    steps: int
    timestamp: int


TrackedLog = FoodLog | ExerciseLog | WeightLog | StepLog

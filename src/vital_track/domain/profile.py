"""Domain models for the user profile."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Biological sex used by the BMR equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Habitual activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class Goal(StrEnum):
    """Body composition goal."""

    LOSE_WEIGHT = "lose_weight"
    MAINTAIN = "maintain"
    GAIN_MUSCLE = "gain_muscle"


@dataclass(frozen=True)
class UserProfile:
    """Anthropometrics and goals for a single user.

    Height is in centimetres, weights in kilograms. Height must be positive;
    the metrics calculator does not check it.
    """

    age: int
    gender: Gender
    height: float
    current_weight: float
    target_weight: float
    activity_level: ActivityLevel
    goal: Goal
    step_goal: int
    name: str = "New User"


DEFAULT_PROFILE = UserProfile(
    name="New User",
    age=28,
    gender=Gender.MALE,
    height=180,
    current_weight=85,
    target_weight=78,
    activity_level=ActivityLevel.MODERATE,
    goal=Goal.LOSE_WEIGHT,
    step_goal=10000,
)

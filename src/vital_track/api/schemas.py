"""Request and response models for the HTTP API.

Field names are camelCase on the wire.
"""

from typing import Annotated, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    PositiveFloat,
    PositiveInt,
)
from pydantic.alias_generators import to_camel

from vital_track.domain.assistant import ChatMessage
from vital_track.domain.logs import ExerciseLog, FoodLog
from vital_track.domain.profile import ActivityLevel, Gender, Goal, UserProfile
from vital_track.services.aggregation import MAX_TIMESTAMP_MS

EpochMillis = Annotated[int, Field(ge=0, le=MAX_TIMESTAMP_MS)]


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class RegisterRequest(ApiModel):
    """Sign-up payload."""

    email: str
    password: str = Field(min_length=6)
    name: str = ""


class LoginRequest(ApiModel):
    """Sign-in payload."""

    email: str
    password: str


class UserModel(ApiModel):
    """Public user identity."""

    id: str
    email: str
    name: str


class AuthResponse(ApiModel):
    """Signed-in user and their bearer token."""

    user: UserModel
    access_token: str


class ProfileModel(ApiModel):
    """User profile; validated here so the calculator gets sane input."""

    name: str = "New User"
    age: PositiveInt
    gender: Gender
    height: PositiveFloat
    current_weight: PositiveFloat
    target_weight: PositiveFloat
    activity_level: ActivityLevel
    goal: Goal
    step_goal: PositiveInt

    def to_domain(self) -> UserProfile:
        """Return the domain profile."""
        return UserProfile(**self.model_dump())


class FoodLogCreate(ApiModel):
    """New food entry."""

    name: str = Field(min_length=1)
    calories: NonNegativeFloat
    protein: NonNegativeFloat = 0
    carbs: NonNegativeFloat = 0
    fat: NonNegativeFloat = 0
    timestamp: EpochMillis | None = None


class ExerciseLogCreate(ApiModel):
    """New exercise entry."""

    type: str = Field(min_length=1)
    duration: NonNegativeFloat
    calories_burned: NonNegativeFloat
    timestamp: EpochMillis | None = None


class WeightLogCreate(ApiModel):
    """New weigh-in."""

    weight: PositiveFloat
    timestamp: EpochMillis | None = None


class StepLogCreate(ApiModel):
    """New step count."""

    steps: NonNegativeInt
    timestamp: EpochMillis | None = None


class FoodLogModel(ApiModel):
    """Stored food entry."""

    kind: Literal["food"] = "food"
    id: str
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    timestamp: int


class ExerciseLogModel(ApiModel):
    """Stored exercise entry."""

    kind: Literal["exercise"] = "exercise"
    id: str
    type: str
    duration: float
    calories_burned: float
    timestamp: int


class WeightLogModel(ApiModel):
    """Stored weigh-in."""

    id: str
    weight: float
    timestamp: int


class StepLogModel(ApiModel):
    """Stored step count."""

    id: str
    steps: int
    timestamp: int


class MacrosModel(ApiModel):
    """Macro targets in grams."""

    protein: int
    carbs: int
    fat: int


class HealthStatsModel(ApiModel):
    """Targets derived from the profile."""

    bmi: float
    bmr: int
    tdee: int
    daily_calorie_target: int
    macros: MacrosModel


class DailyTotalsModel(ApiModel):
    """Totals for one day."""

    calories_in: float
    protein: float
    carbs: float
    fat: float
    calories_out: float
    steps: int
    recent_activities: list[FoodLogModel | ExerciseLogModel]


class DashboardSummaryModel(ApiModel):
    """Progress figures for the dashboard."""

    calories_remaining: float
    calorie_progress: float
    step_progress: float


class DashboardModel(ApiModel):
    """Everything the dashboard renders."""

    profile: ProfileModel
    stats: HealthStatsModel
    totals: DailyTotalsModel
    summary: DashboardSummaryModel


class ChatMessageModel(ApiModel):
    """One conversation turn."""

    role: Literal["user", "model"]
    text: str

    def to_domain(self) -> ChatMessage:
        """Return the domain message."""
        return ChatMessage(role=self.role, text=self.text)


class ChatRequest(ApiModel):
    """Question plus the conversation so far."""

    question: str = Field(min_length=1)
    history: list[ChatMessageModel] = Field(default_factory=list)


class ChatResponse(ApiModel):
    """Assistant answer."""

    answer: str


class InsightResponse(ApiModel):
    """Assistant insight for today."""

    insight: str


def activity_model(log: FoodLog | ExerciseLog) -> FoodLogModel | ExerciseLogModel:
    """Wrap a food or exercise entry for a mixed activity list."""
    if isinstance(log, FoodLog):
        return FoodLogModel.model_validate(log)
    return ExerciseLogModel.model_validate(log)

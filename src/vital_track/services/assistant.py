"""Health assistant service backed by a generative model."""

import json
import logging
from dataclasses import asdict, dataclass
from typing import Protocol

from vital_track.domain.assistant import ChatMessage
from vital_track.domain.logs import ExerciseLog, FoodLog
from vital_track.domain.profile import UserProfile
from vital_track.domain.stats import DailyTotals, HealthStats

_logger = logging.getLogger(__name__)

INSIGHT_FALLBACK = (
    "Keep up the great work! Focus on staying hydrated and hitting your "
    "protein targets."
)
CHAT_FALLBACK = (
    "I'm having trouble connecting to my health database right now. "
    "Please try again in a moment!"
)
SUGGESTED_PROMPTS = (
    "What are good sources of fiber?",
    "Suggest a quick post-workout meal.",
    "Is my current macro split okay for muscle gain?",
    "How much water should I drink today?",
)
RECENT_ENTRY_LIMIT = 5


class AssistantClient(Protocol):
    """Interface for text generation."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        instructions: str | None,
        messages: list[ChatMessage],
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        """Return the model's reply to the conversation."""


@dataclass
class AssistantService:
    """Builds coaching prompts from a user's data and asks the model."""

    client: AssistantClient | None
    model: str

    async def get_insights(  # noqa: PLR0913
        self,
        profile: UserProfile,
        stats: HealthStats,
        recent_food: list[FoodLog],
        recent_exercise: list[ExerciseLog],
        daily_steps: int,
    ) -> str:
        """Return three short actionable insights for today."""
        prompt = build_insight_prompt(
            profile,
            stats,
            recent_food[:RECENT_ENTRY_LIMIT],
            recent_exercise[:RECENT_ENTRY_LIMIT],
            daily_steps,
        )
        reply = await self._generate(
            instructions=None,
            messages=[ChatMessage(role="user", text=prompt)],
            temperature=0.7,
            max_output_tokens=250,
        )
        return reply or INSIGHT_FALLBACK

    async def ask(
        self,
        question: str,
        profile: UserProfile,
        stats: HealthStats,
        totals: DailyTotals,
        history: list[ChatMessage],
    ) -> str:
        """Answer a question in the context of the user's data."""
        messages = [*history, ChatMessage(role="user", text=question)]
        reply = await self._generate(
            instructions=build_chat_instructions(profile, stats, totals),
            messages=messages,
            temperature=0.8,
            max_output_tokens=500,
        )
        return reply or CHAT_FALLBACK

    def suggested_prompts(self) -> list[str]:
        """Return quick questions offered in the chat view."""
        return list(SUGGESTED_PROMPTS)

    async def _generate(
        self,
        *,
        instructions: str | None,
        messages: list[ChatMessage],
        temperature: float,
        max_output_tokens: int,
    ) -> str | None:
        if self.client is None:
            _logger.warning("Assistant client not configured")
            return None
        try:
            reply = await self.client.generate(
                model=self.model,
                instructions=instructions,
                messages=messages,
                temperature=temperature,
                max_output_tokens=max_output_tokens,
            )
        except Exception:
            _logger.exception("Assistant generation failed: model=%s", self.model)
            return None
        return reply.strip() or None


def build_insight_prompt(
    profile: UserProfile,
    stats: HealthStats,
    recent_food: list[FoodLog],
    recent_exercise: list[ExerciseLog],
    daily_steps: int,
) -> str:
    """Return the prompt asking for today's insights."""
    meals = ", ".join(f"{log.name} ({_number(log.calories)}kcal)" for log in recent_food)
    exercise = ", ".join(
        f"{log.type} for {_number(log.duration)}mins" for log in recent_exercise
    )
    return (
        "Act as a professional nutritionist and fitness coach. "
        "Analyze this user data:\n\n"
        f"Profile: {json.dumps(asdict(profile))}\n"
        f"Targets: {json.dumps(asdict(stats))}\n"
        f"Recent Meals: {meals}\n"
        f"Recent Exercise: {exercise}\n"
        f"Today's Steps: {daily_steps} (Goal: {profile.step_goal})\n\n"
        "Provide 3 short, actionable insights for today.\n"
        "Focus on:\n"
        "1. Caloric balance.\n"
        "2. Macro distribution improvement.\n"
        "3. Activity level and steps.\n"
        "Keep it concise and supportive. Format as a bulleted list."
    )


def build_chat_instructions(
    profile: UserProfile, stats: HealthStats, totals: DailyTotals
) -> str:
    """Return the system context for a chat turn."""
    return (
        "You are VitalTrack AI, a professional health, nutrition, "
        "and fitness assistant.\n"
        f"User Profile: {profile.name}, Age {profile.age}, {profile.gender}, "
        f"Goal: {profile.goal}.\n"
        f"Current Stats: BMI {stats.bmi}, "
        f"Target Cal: {stats.daily_calorie_target}kcal, "
        f"Step Goal: {profile.step_goal}.\n"
        f"Today's Progress: {_number(totals.calories_in)}kcal consumed, "
        f"{_number(totals.calories_out)}kcal burned, {totals.steps} steps taken.\n\n"
        "Rules:\n"
        "1. Provide evidence-based health and fitness advice.\n"
        "2. Be encouraging and concise.\n"
        "3. DISCLAIMER: Always remind the user that you are an AI and not a "
        "doctor if they ask about medical symptoms. Do not provide medical "
        "diagnoses.\n"
        "4. Use the user's specific data (calories, goals, steps) to "
        "personalize answers."
    )


def _number(value: float) -> str:
    # Fixed-point with trailing zeros dropped: 350.0 -> "350", 12.50 -> "12.5".
    return f"{value:.2f}".rstrip("0").rstrip(".")

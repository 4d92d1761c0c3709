"""Tracker service for profiles and log collections."""

import logging
import secrets
import string
from dataclasses import dataclass, replace
from typing import Protocol
from zoneinfo import ZoneInfo

from vital_track.domain.logs import (
    ExerciseLog,
    FoodLog,
    LogKind,
    StepLog,
    TrackedLog,
    WeightLog,
)
from vital_track.domain.profile import DEFAULT_PROFILE, UserProfile
from vital_track.domain.stats import DailyTotals, DashboardSummary, HealthStats
from vital_track.services.aggregation import aggregate_daily_totals, now_ms
from vital_track.services.dashboard import summarize_dashboard
from vital_track.services.metrics import calculate_health_stats

_logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 9


class TrackerRepository(Protocol):
    """Persistence interface for profiles and log collections."""

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the stored profile for a user, if any."""

    def save_profile(self, user_id: str, profile: UserProfile) -> None:
        """Create or replace the profile for a user."""

    def list_logs(self, user_id: str, kind: LogKind) -> list[TrackedLog]:
        """Return every entry of one collection."""

    def append_log(self, user_id: str, kind: LogKind, log: TrackedLog) -> None:
        """Append an entry to one collection."""

    def delete_log(self, user_id: str, kind: LogKind, log_id: str) -> bool:
        """Remove an entry; return True when something was removed."""


@dataclass(frozen=True)
class Dashboard:
    """Everything the dashboard view renders for one day."""

    profile: UserProfile
    stats: HealthStats
    totals: DailyTotals
    summary: DashboardSummary


@dataclass
class TrackerService:
    """Application service that owns log mutation and derived numbers."""

    repository: TrackerRepository
    timezone_name: str | None = None

    def get_profile(self, user_id: str) -> UserProfile:
        """Return the user's profile, or the default profile when unset."""
        return self.repository.get_profile(user_id) or DEFAULT_PROFILE

    def sync_profile_name(self, user_id: str, name: str) -> UserProfile:
        """Copy the account name onto the profile, creating it from defaults if unset."""
        profile = self.get_profile(user_id)
        if profile.name != name:
            profile = replace(profile, name=name)
            self.repository.save_profile(user_id, profile)
        return profile

    def update_profile(self, user_id: str, profile: UserProfile) -> UserProfile:
        """Persist a new profile for the user."""
        self.repository.save_profile(user_id, profile)
        return profile

    def add_food(  # noqa: PLR0913
        self,
        user_id: str,
        *,
        name: str,
        calories: float,
        protein: float,
        carbs: float,
        fat: float,
        timestamp: int | None = None,
    ) -> FoodLog:
        """Append a food entry."""
        log = FoodLog(
            id=_new_log_id(),
            name=name,
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
            timestamp=_resolve_timestamp(timestamp),
        )
        self.repository.append_log(user_id, LogKind.FOOD, log)
        return log

    def add_exercise(
        self,
        user_id: str,
        *,
        type: str,  # noqa: A002
        duration: float,
        calories_burned: float,
        timestamp: int | None = None,
    ) -> ExerciseLog:
        """Append an exercise entry."""
        log = ExerciseLog(
            id=_new_log_id(),
            type=type,
            duration=duration,
            calories_burned=calories_burned,
            timestamp=_resolve_timestamp(timestamp),
        )
        self.repository.append_log(user_id, LogKind.EXERCISE, log)
        return log

    def add_steps(
        self, user_id: str, *, steps: int, timestamp: int | None = None
    ) -> StepLog:
        """Append a step count entry."""
        log = StepLog(
            id=_new_log_id(), steps=steps, timestamp=_resolve_timestamp(timestamp)
        )
        self.repository.append_log(user_id, LogKind.STEPS, log)
        return log

    def add_weight(
        self, user_id: str, *, weight: float, timestamp: int | None = None
    ) -> WeightLog:
        """Append a weigh-in and make it the profile's current weight."""
        log = WeightLog(
            id=_new_log_id(), weight=weight, timestamp=_resolve_timestamp(timestamp)
        )
        self.repository.append_log(user_id, LogKind.WEIGHT, log)
        profile = self.get_profile(user_id)
        self.repository.save_profile(user_id, replace(profile, current_weight=weight))
        _logger.info("Weight logged: user_id=%s weight=%s", user_id, weight)
        return log

    def delete_log(self, user_id: str, kind: LogKind, log_id: str) -> bool:
        """Remove an entry from one of the user's collections."""
        return self.repository.delete_log(user_id, kind, log_id)

    def list_food_logs(self, user_id: str, limit: int | None = None) -> list[FoodLog]:
        """Return food entries, newest first."""
        return _newest_first(self.repository.list_logs(user_id, LogKind.FOOD), limit)

    def list_exercise_logs(
        self, user_id: str, limit: int | None = None
    ) -> list[ExerciseLog]:
        """Return exercise entries, newest first."""
        return _newest_first(
            self.repository.list_logs(user_id, LogKind.EXERCISE), limit
        )

    def get_weight_history(self, user_id: str) -> list[WeightLog]:
        """Return weigh-ins oldest first, for trend charts."""
        logs = self.repository.list_logs(user_id, LogKind.WEIGHT)
        return sorted(logs, key=lambda log: log.timestamp)

    def get_stats(self, user_id: str) -> HealthStats:
        """Return targets derived from the user's profile."""
        return calculate_health_stats(self.get_profile(user_id))

    def get_today(self, user_id: str, reference_ms: int | None = None) -> DailyTotals:
        """Return the totals for the day containing ``reference_ms``."""
        tz = ZoneInfo(self.timezone_name) if self.timezone_name else None
        return aggregate_daily_totals(
            self.repository.list_logs(user_id, LogKind.FOOD),
            self.repository.list_logs(user_id, LogKind.EXERCISE),
            self.repository.list_logs(user_id, LogKind.STEPS),
            reference_ms=reference_ms,
            tz=tz,
        )

    def get_dashboard(self, user_id: str, reference_ms: int | None = None) -> Dashboard:
        """Return profile, targets, totals and progress in one call."""
        profile = self.get_profile(user_id)
        stats = calculate_health_stats(profile)
        totals = self.get_today(user_id, reference_ms)
        return Dashboard(
            profile=profile,
            stats=stats,
            totals=totals,
            summary=summarize_dashboard(stats, totals, profile.step_goal),
        )


def _new_log_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def _resolve_timestamp(timestamp: int | None) -> int:
    return now_ms() if timestamp is None else timestamp


def _newest_first(logs: list, limit: int | None) -> list:
    ordered = sorted(logs, key=lambda log: log.timestamp, reverse=True)
    return ordered if limit is None else ordered[:limit]

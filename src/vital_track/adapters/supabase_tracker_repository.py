"""Supabase repository for profiles and log collections."""

from dataclasses import dataclass

from supabase import Client

from vital_track.adapters.log_rows import (
    log_from_row,
    log_to_row,
    profile_from_row,
    profile_to_row,
)
from vital_track.domain.logs import LogKind, TrackedLog
from vital_track.domain.profile import UserProfile
from vital_track.services.tracker import TrackerRepository

LOG_TABLES: dict[LogKind, str] = {
    LogKind.FOOD: "food_logs",
    LogKind.EXERCISE: "exercise_logs",
    LogKind.WEIGHT: "weight_logs",
    LogKind.STEPS: "step_logs",
}


@dataclass
class SupabaseTrackerRepository(TrackerRepository):
    """Supabase implementation for tracker persistence."""

    client: Client

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the stored profile for a user."""
        response = (
            self.client.table("profiles")
            .select("data")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        data = response.data[0].get("data")
        return profile_from_row(data) if isinstance(data, dict) else None

    def save_profile(self, user_id: str, profile: UserProfile) -> None:
        """Upsert the profile row for a user."""
        self.client.table("profiles").upsert(
            {"user_id": user_id, "data": profile_to_row(profile)},
            on_conflict="user_id",
        ).execute()

    def list_logs(self, user_id: str, kind: LogKind) -> list[TrackedLog]:
        """Return every entry of one collection, oldest first."""
        response = (
            self.client.table(LOG_TABLES[kind])
            .select("*")
            .eq("user_id", user_id)
            .order("timestamp", desc=False)
            .execute()
        )
        return [log_from_row(kind, row) for row in response.data or []]

    def append_log(self, user_id: str, kind: LogKind, log: TrackedLog) -> None:
        """Insert a log row."""
        response = (
            self.client.table(LOG_TABLES[kind])
            .insert({"user_id": user_id, **log_to_row(log)})
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to insert {kind} log in Supabase")

    def delete_log(self, user_id: str, kind: LogKind, log_id: str) -> bool:
        """Delete a log row owned by the user."""
        response = (
            self.client.table(LOG_TABLES[kind])
            .delete()
            .eq("user_id", user_id)
            .eq("id", log_id)
            .execute()
        )
        return bool(response.data)

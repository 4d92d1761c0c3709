"""Tracker repository stored in the local JSON file."""

from dataclasses import dataclass

from vital_track.adapters.local_store import JsonStore
from vital_track.adapters.log_rows import (
    log_from_row,
    log_to_row,
    profile_from_row,
    profile_to_row,
)
from vital_track.domain.logs import LogKind, TrackedLog
from vital_track.domain.profile import UserProfile
from vital_track.services.tracker import TrackerRepository


@dataclass
class LocalTrackerRepository(TrackerRepository):
    """Keeps each user's profile and collections under ``tracker.<user_id>``."""

    store: JsonStore

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the stored profile for a user."""
        row = _user_data(self.store.read(), user_id).get("profile")
        return profile_from_row(row) if isinstance(row, dict) else None

    def save_profile(self, user_id: str, profile: UserProfile) -> None:
        """Replace the stored profile."""
        with self.store.transaction() as data:
            _user_data(data, user_id)["profile"] = profile_to_row(profile)

    def list_logs(self, user_id: str, kind: LogKind) -> list[TrackedLog]:
        """Return the collection in insertion order."""
        rows = _user_data(self.store.read(), user_id).get(kind.value, [])
        return [log_from_row(kind, row) for row in rows]

    def append_log(self, user_id: str, kind: LogKind, log: TrackedLog) -> None:
        """Append an entry to the collection."""
        with self.store.transaction() as data:
            _user_data(data, user_id).setdefault(kind.value, []).append(
                log_to_row(log)
            )

    def delete_log(self, user_id: str, kind: LogKind, log_id: str) -> bool:
        """Remove an entry by id."""
        with self.store.transaction() as data:
            user_data = _user_data(data, user_id)
            rows = user_data.get(kind.value, [])
            kept = [row for row in rows if row.get("id") != log_id]
            user_data[kind.value] = kept
            return len(kept) != len(rows)


def _user_data(data: dict[str, object], user_id: str) -> dict[str, object]:
    tracker = data.setdefault("tracker", {})
    return tracker.setdefault(user_id, {})

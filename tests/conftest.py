"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from uuid import uuid4

import pytest

from vital_track.config import Settings
from vital_track.containers import AppContainer
from vital_track.domain.assistant import ChatMessage
from vital_track.domain.logs import LogKind, TrackedLog
from vital_track.domain.profile import UserProfile
from vital_track.domain.users import AuthSession, User
from vital_track.services.assistant import AssistantClient, AssistantService
from vital_track.services.auth import AuthError, AuthProvider, AuthService
from vital_track.services.tracker import TrackerRepository, TrackerService


def day_start_ms(day: date, tz: tzinfo | None = None) -> int:
    """Return the epoch milliseconds of local midnight at the start of ``day``."""
    midnight = datetime(day.year, day.month, day.day, tzinfo=tz)
    return round(midnight.timestamp() * 1000)


@dataclass
class InMemoryTrackerRepository(TrackerRepository):
    """In-memory tracker repository for tests."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)
    logs: dict[tuple[str, LogKind], list[TrackedLog]] = field(default_factory=dict)

    def get_profile(self, user_id: str) -> UserProfile | None:
        return self.profiles.get(user_id)

    def save_profile(self, user_id: str, profile: UserProfile) -> None:
        self.profiles[user_id] = profile

    def list_logs(self, user_id: str, kind: LogKind) -> list[TrackedLog]:
        return list(self.logs.get((user_id, kind), []))

    def append_log(self, user_id: str, kind: LogKind, log: TrackedLog) -> None:
        self.logs.setdefault((user_id, kind), []).append(log)

    def delete_log(self, user_id: str, kind: LogKind, log_id: str) -> bool:
        rows = self.logs.get((user_id, kind), [])
        kept = [log for log in rows if log.id != log_id]
        self.logs[(user_id, kind)] = kept
        return len(kept) != len(rows)


@dataclass
class InMemoryAuthProvider(AuthProvider):
    """In-memory identity provider for tests."""

    accounts: dict[str, tuple[User, str]] = field(default_factory=dict)
    sessions: dict[str, User] = field(default_factory=dict)

    def register(self, email: str, password: str, name: str) -> AuthSession:
        if email in self.accounts:
            raise AuthError("Email already exists.")
        user = User(id=f"user-{uuid4().hex[:8]}", email=email, name=name)
        self.accounts[email] = (user, password)
        return self._open(user)

    def login(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get(email)
        if account is None or account[1] != password:
            raise AuthError("Invalid email or password.")
        return self._open(account[0])

    def logout(self, access_token: str) -> None:
        self.sessions.pop(access_token, None)

    def get_user(self, access_token: str) -> User | None:
        return self.sessions.get(access_token)

    def _open(self, user: User) -> AuthSession:
        token = uuid4().hex
        self.sessions[token] = user
        return AuthSession(user=user, access_token=token)


@dataclass
class FakeAssistantClient(AssistantClient):
    """Fake assistant client that records requests."""

    reply: str = "- Eat more protein."
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        instructions: str | None,
        messages: list[ChatMessage],
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "instructions": instructions,
                "messages": messages,
                "temperature": temperature,
                "max_output_tokens": max_output_tokens,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        supabase_url=None,
        supabase_anon_key=None,
        openai_api_key=None,
        local_store_path=str(tmp_path / "store.json"),
        timezone="UTC",
    )


@pytest.fixture
def tracker_repository() -> InMemoryTrackerRepository:
    return InMemoryTrackerRepository()


@pytest.fixture
def assistant_client() -> FakeAssistantClient:
    return FakeAssistantClient()


@pytest.fixture
def container(
    settings: Settings,
    tracker_repository: InMemoryTrackerRepository,
    assistant_client: FakeAssistantClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=AuthService(InMemoryAuthProvider()),
        tracker_service=TrackerService(tracker_repository, timezone_name="UTC"),
        assistant_service=AssistantService(
            client=assistant_client, model=settings.openai_model
        ),
        close_resources=close_resources,
    )

"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from vital_track.adapters.local_auth_provider import LocalAuthProvider
from vital_track.adapters.local_store import JsonStore
from vital_track.adapters.local_tracker_repository import LocalTrackerRepository
from vital_track.adapters.openai_assistant_client import OpenAIAssistantClient
from vital_track.adapters.supabase_auth_provider import SupabaseAuthProvider
from vital_track.adapters.supabase_tracker_repository import (
    SupabaseTrackerRepository,
)
from vital_track.config import Settings
from vital_track.services.assistant import AssistantService
from vital_track.services.auth import AuthProvider, AuthService
from vital_track.services.tracker import TrackerRepository, TrackerService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    tracker_service: TrackerService
    assistant_service: AssistantService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    auth_provider: AuthProvider
    tracker_repository: TrackerRepository
    if resolved_settings.supabase_enabled:
        # Separate clients: signing in mutates the auth client's session.
        auth_provider = SupabaseAuthProvider(
            create_client(
                resolved_settings.supabase_url, resolved_settings.supabase_anon_key
            )
        )
        tracker_repository = SupabaseTrackerRepository(
            create_client(
                resolved_settings.supabase_url, resolved_settings.supabase_anon_key
            )
        )
    else:
        _logger.warning(
            "Supabase keys missing, falling back to local store at %s",
            resolved_settings.local_store_path,
        )
        store = JsonStore(Path(resolved_settings.local_store_path))
        auth_provider = LocalAuthProvider(store)
        tracker_repository = LocalTrackerRepository(store)

    assistant_client = (
        OpenAIAssistantClient.create(resolved_settings.openai_api_key)
        if resolved_settings.openai_api_key
        else None
    )
    assistant_service = AssistantService(
        client=assistant_client,
        model=resolved_settings.openai_model,
    )

    async def close_resources() -> None:
        if assistant_client is not None:
            await assistant_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=AuthService(auth_provider),
        tracker_service=TrackerService(
            tracker_repository, timezone_name=resolved_settings.timezone
        ),
        assistant_service=assistant_service,
        close_resources=close_resources,
    )

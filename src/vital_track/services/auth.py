"""Authentication service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from vital_track.domain.users import AuthSession, User

_logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Raised when a sign-up, sign-in or token check fails."""


class AuthProvider(Protocol):
    """Interface for identity providers."""

    def register(self, email: str, password: str, name: str) -> AuthSession:
        """Create an account and return a signed-in session."""

    def login(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""

    def logout(self, access_token: str) -> None:
        """End the session identified by the token."""

    def get_user(self, access_token: str) -> User | None:
        """Return the user for a token, or None when it is not valid."""


@dataclass
class AuthService:
    """Application service for account and session actions."""

    provider: AuthProvider

    def register(self, email: str, password: str, name: str) -> AuthSession:
        """Register a new account."""
        email = _normalize_email(email)
        if not email or not password:
            raise AuthError("Email and password are required.")
        session = self.provider.register(email, password, name.strip() or "User")
        _logger.info("User registered: user_id=%s", session.user.id)
        return session

    def login(self, email: str, password: str) -> AuthSession:
        """Sign in an existing account."""
        return self.provider.login(_normalize_email(email), password)

    def logout(self, access_token: str) -> None:
        """Sign out the session."""
        self.provider.logout(access_token)

    def get_current_user(self, access_token: str | None) -> User | None:
        """Resolve the user behind an access token."""
        if not access_token:
            return None
        return self.provider.get_user(access_token)


def _normalize_email(email: str) -> str:
    return email.strip().lower()

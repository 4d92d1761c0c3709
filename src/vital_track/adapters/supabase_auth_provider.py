"""Supabase Auth identity provider."""

from dataclasses import dataclass

from supabase import Client
from supabase_auth.errors import AuthError as SupabaseAuthError
from supabase_auth.types import User as SupabaseUser

from vital_track.domain.users import AuthSession, User
from vital_track.services.auth import AuthError, AuthProvider


@dataclass
class SupabaseAuthProvider(AuthProvider):
    """Identity provider backed by Supabase Auth."""

    client: Client

    def register(self, email: str, password: str, name: str) -> AuthSession:
        """Sign up a user with their display name in user metadata."""
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"full_name": name}},
                }
            )
        except SupabaseAuthError as exc:
            raise AuthError(exc.message) from exc
        if response.user is None:
            raise AuthError("An unexpected error occurred.")
        if response.session is None:
            raise AuthError("Check your email to confirm your account.")
        return AuthSession(
            user=_to_user(response.user, default_name=name),
            access_token=response.session.access_token,
        )

    def login(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except SupabaseAuthError as exc:
            raise AuthError(exc.message) from exc
        if response.user is None or response.session is None:
            raise AuthError("Invalid credentials.")
        return AuthSession(
            user=_to_user(response.user),
            access_token=response.session.access_token,
        )

    def logout(self, access_token: str) -> None:
        """Revoke the session behind the token."""
        try:
            self.client.auth.admin.sign_out(access_token)
        except SupabaseAuthError as exc:
            raise AuthError(exc.message) from exc

    def get_user(self, access_token: str) -> User | None:
        """Return the user that owns the token."""
        try:
            response = self.client.auth.get_user(access_token)
        except SupabaseAuthError:
            return None
        if response is None or response.user is None:
            return None
        return _to_user(response.user)


def _to_user(user: SupabaseUser, default_name: str = "User") -> User:
    metadata = user.user_metadata or {}
    return User(
        id=str(user.id),
        email=user.email or "",
        name=metadata.get("full_name") or default_name,
    )

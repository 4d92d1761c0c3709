"""Account store in the local JSON file, for use without Supabase."""

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from uuid import uuid4

from vital_track.adapters.local_store import JsonStore
from vital_track.domain.users import AuthSession, User
from vital_track.services.auth import AuthError, AuthProvider

_logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 200_000


@dataclass
class LocalAuthProvider(AuthProvider):
    """Identity provider with salted PBKDF2 password hashes and opaque tokens."""

    store: JsonStore

    def register(self, email: str, password: str, name: str) -> AuthSession:
        """Create an account and sign it in."""
        with self.store.transaction() as data:
            accounts = data.setdefault("accounts", {})
            if email in accounts:
                raise AuthError("Email already exists.")
            salt = secrets.token_hex(16)
            user = User(id=f"local-{uuid4().hex[:9]}", email=email, name=name)
            accounts[email] = {
                "id": user.id,
                "email": user.email,
                "name": user.name,
                "salt": salt,
                "password_hash": _hash_password(password, salt),
            }
            token = _open_session(data, user.id)
        return AuthSession(user=user, access_token=token)

    def login(self, email: str, password: str) -> AuthSession:
        """Check the password and open a session."""
        with self.store.transaction() as data:
            account = data.get("accounts", {}).get(email)
            if account is None or not hmac.compare_digest(
                account["password_hash"], _hash_password(password, account["salt"])
            ):
                raise AuthError("Invalid email or password.")
            token = _open_session(data, account["id"])
        return AuthSession(user=_to_user(account), access_token=token)

    def logout(self, access_token: str) -> None:
        """Forget the session token."""
        with self.store.transaction() as data:
            data.get("sessions", {}).pop(access_token, None)

    def get_user(self, access_token: str) -> User | None:
        """Return the account behind a session token."""
        data = self.store.read()
        user_id = data.get("sessions", {}).get(access_token)
        if user_id is None:
            return None
        for account in data.get("accounts", {}).values():
            if account["id"] == user_id:
                return _to_user(account)
        _logger.warning("Session refers to a missing account: user_id=%s", user_id)
        return None


def _open_session(data: dict[str, object], user_id: str) -> str:
    token = secrets.token_urlsafe(32)
    data.setdefault("sessions", {})[token] = user_id
    return token


def _hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), PBKDF2_ITERATIONS
    )
    return digest.hex()


def _to_user(account: dict[str, str]) -> User:
    return User(id=account["id"], email=account["email"], name=account["name"])

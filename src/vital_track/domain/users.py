"""Domain models for authenticated users."""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Public identity of a signed-in user."""

    id: str
    email: str
    name: str


@dataclass(frozen=True)
class AuthSession:
    """A user together with the token that identifies their session."""

    user: User
    access_token: str

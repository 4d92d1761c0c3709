"""Domain models for the health assistant."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ChatMessage:
    """Single turn of an assistant conversation."""

    role: Literal["user", "model"]
    text: str

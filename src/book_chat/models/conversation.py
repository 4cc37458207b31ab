"""Conversation state models for book_chat."""

from enum import StrEnum

from pydantic import BaseModel

from book_chat.models.message import Turn

__all__ = [
    "ConversationStatus",
    "ConversationState",
]


class ConversationStatus(StrEnum):
    """Turn lifecycle states.

    ERROR is informational only: submitting from ERROR behaves
    exactly like submitting from IDLE.
    """

    IDLE = "idle"
    SENDING = "sending"
    ERROR = "error"


class ConversationState(BaseModel, frozen=True):
    """Immutable snapshot handed to observers."""

    session_id: str
    turns: tuple[Turn, ...] = ()
    provider: str
    model: str
    status: ConversationStatus = ConversationStatus.IDLE
    error: str | None = None

    @property
    def is_sending(self) -> bool:
        """True while a provider call is in flight."""
        return self.status is ConversationStatus.SENDING

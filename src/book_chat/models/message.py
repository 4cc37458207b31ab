"""Message models for book_chat.

``Message`` is the canonical role/content pair exchanged with providers.
``Turn`` is the UI-facing record of one rendered message.
"""

from typing import Literal

from pydantic import BaseModel, Field

__all__ = [
    "MessageRole",
    "TurnRole",
    "Message",
    "Turn",
]

MessageRole = Literal["system", "user", "assistant"]
TurnRole = Literal["user", "assistant"]


class Message(BaseModel, frozen=True):
    """Canonical chat message sent to or received from a provider."""

    role: MessageRole
    content: str

    def to_wire(self) -> dict[str, str]:
        """Plain dict in the shape both vendor APIs accept."""
        return {"role": self.role, "content": self.content}


class Turn(BaseModel, frozen=True):
    """One visible message in the conversation.

    Attributes:
        id: Unique turn ID within the conversation
        role: Who produced the turn
        content: Message text
        timestamp: Creation time in epoch seconds
    """

    id: str = Field(description="Hash-based turn ID")
    role: TurnRole
    content: str
    timestamp: float = Field(description="Epoch seconds")

    def to_message(self) -> Message:
        """Convert to the canonical provider message."""
        return Message(role=self.role, content=self.content)

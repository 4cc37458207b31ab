"""Public models for book_chat.

This module exports all public data transfer objects.
"""

from book_chat.models.context import BookContext
from book_chat.models.conversation import ConversationState, ConversationStatus
from book_chat.models.message import Message, MessageRole, Turn, TurnRole
from book_chat.models.provider import (
    ChatPreference,
    ModelOption,
    ProviderDescriptor,
    ProviderOption,
    RequestOptions,
)

__all__ = [
    "BookContext",
    "ChatPreference",
    "ConversationState",
    "ConversationStatus",
    "Message",
    "MessageRole",
    "ModelOption",
    "ProviderDescriptor",
    "ProviderOption",
    "RequestOptions",
    "Turn",
    "TurnRole",
]

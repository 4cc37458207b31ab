"""LLM provider interface for book_chat.

This module defines the Protocol every chat backend implements.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from book_chat.models.message import Message
from book_chat.models.provider import ProviderDescriptor, RequestOptions

__all__ = [
    "ChatProviderInterface",
]


@runtime_checkable
class ChatProviderInterface(Protocol):
    """Contract for a chat-capable provider adapter.

    Implementations translate the canonical message list into their
    vendor's wire shape and return the reply text.
    """

    @property
    def descriptor(self) -> ProviderDescriptor:
        """Static identity of the provider."""
        ...

    @property
    def default_model(self) -> str:
        """Model used when the caller does not pick one."""
        ...

    async def chat(
        self,
        messages: Sequence[Message],
        options: RequestOptions | None = None,
        credential: str | None = None,
    ) -> str:
        """Send one conversation turn and return the reply text.

        Args:
            messages: Canonical message list, at most one leading system message
            options: Model, temperature and token cap; missing fields are defaulted
            credential: API key of the signed-in user

        Returns:
            The reply text, never empty

        Raises:
            AuthRequiredError: Credential required but missing (no request sent)
            NetworkError: Provider unreachable
            ProviderError: Provider answered with a non-success status
            EmptyResponseError: Provider answered without reply text
        """
        ...

    async def close(self) -> None:
        """Release HTTP clients."""
        ...

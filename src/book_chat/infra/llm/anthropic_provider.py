"""Anthropic chat provider for book_chat.

The Messages API keeps system instructions out of the turn list, so the
canonical system message is lifted into the dedicated ``system`` field.
"""

from collections.abc import Sequence
from typing import Any

from anthropic import APIConnectionError, APIStatusError, APITimeoutError, AsyncAnthropic

from book_chat.errors import ChatError, NetworkError
from book_chat.infra.llm.base import BaseChatProvider
from book_chat.models.message import Message
from book_chat.models.provider import ModelOption, ProviderDescriptor, RequestOptions

__all__ = [
    "AnthropicProvider",
    "split_system",
]


def split_system(messages: Sequence[Message]) -> tuple[str | None, list[Message]]:
    """Lift the leading system message out of the turn list.

    Only a system message in first position is extracted; anything after
    it is passed through unchanged.

    Returns:
        Tuple of (system text or None, remaining messages)
    """
    if messages and messages[0].role == "system":
        return messages[0].content, list(messages[1:])
    return None, list(messages)


class AnthropicProvider(BaseChatProvider):
    """Anthropic implementation of the chat provider interface."""

    descriptor = ProviderDescriptor(
        name="anthropic",
        label="Anthropic",
        auth_required=True,
        models=(
            ModelOption(id="claude-3-5-sonnet-20241022", label="Claude 3.5 Sonnet"),
            ModelOption(id="claude-3-haiku-20240307", label="Claude 3 Haiku"),
        ),
    )
    default_model = "claude-3-5-sonnet-20241022"

    def _create_client(self, credential: str) -> AsyncAnthropic:
        return AsyncAnthropic(
            api_key=credential,
            base_url=self._settings.anthropic_base_url,
            timeout=self._settings.request_timeout,
            max_retries=0,
            http_client=self._http_client,
        )

    async def _complete(
        self,
        client: Any,
        messages: list[Message],
        options: RequestOptions,
    ) -> str | None:
        system, turns = split_system(messages)
        request: dict[str, Any] = {
            "model": options.model,
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
            "messages": [m.to_wire() for m in turns],
        }
        if system is not None:
            request["system"] = system

        response = await client.messages.create(**request)
        if not response.content:
            return None
        # Only the first block is used for multi-block replies
        return getattr(response.content[0], "text", None)

    def _translate_error(self, error: Exception) -> ChatError | None:
        if isinstance(error, APITimeoutError):
            return NetworkError(self.descriptor.label, "Request timed out")
        if isinstance(error, APIConnectionError):
            return NetworkError(self.descriptor.label, "Connection failed")
        if isinstance(error, APIStatusError):
            return self._status_error(error.status_code, error.response, error.body)
        return None

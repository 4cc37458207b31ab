"""OpenAI chat provider for book_chat.

Talks to any OpenAI-compatible ``/chat/completions`` endpoint through the
official SDK. The canonical message list is sent unchanged.
"""

from typing import Any

from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI

from book_chat.errors import ChatError, NetworkError
from book_chat.infra.llm.base import BaseChatProvider
from book_chat.models.message import Message
from book_chat.models.provider import ModelOption, ProviderDescriptor, RequestOptions

__all__ = [
    "OpenAIProvider",
]


class OpenAIProvider(BaseChatProvider):
    """OpenAI implementation of the chat provider interface."""

    descriptor = ProviderDescriptor(
        name="openai",
        label="OpenAI",
        auth_required=True,
        models=(
            ModelOption(id="gpt-4o", label="GPT-4o"),
            ModelOption(id="gpt-4o-mini", label="GPT-4o Mini"),
            ModelOption(id="gpt-3.5-turbo", label="GPT-3.5 Turbo"),
        ),
    )
    default_model = "gpt-4o-mini"

    def _create_client(self, credential: str) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=credential,
            base_url=self._settings.openai_base_url,
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
        response = await client.chat.completions.create(
            model=options.model,
            messages=[m.to_wire() for m in messages],
            temperature=options.temperature,
            max_tokens=options.max_tokens,
        )
        if not response.choices:
            return None
        message = response.choices[0].message
        return message.content if message is not None else None

    def _translate_error(self, error: Exception) -> ChatError | None:
        # APITimeoutError subclasses APIConnectionError
        if isinstance(error, APITimeoutError):
            return NetworkError(self.descriptor.label, "Request timed out")
        if isinstance(error, APIConnectionError):
            return NetworkError(self.descriptor.label, "Connection failed")
        if isinstance(error, APIStatusError):
            return self._status_error(error.status_code, error.response, error.body)
        return None

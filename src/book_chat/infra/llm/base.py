"""Shared plumbing for SDK-backed chat providers.

Subclasses supply the vendor client, the request translation and the
exception mapping; this base enforces the common call contract.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, ClassVar

import httpx

from book_chat.config import LLMSettings
from book_chat.errors import AuthRequiredError, ChatError, EmptyResponseError, ProviderError
from book_chat.logging import get_logger
from book_chat.models.message import Message
from book_chat.models.provider import ProviderDescriptor, RequestOptions

__all__ = [
    "BaseChatProvider",
    "extract_error_message",
]

logger = get_logger(__name__)


def extract_error_message(body: object) -> str | None:
    """Pull the provider's own error text out of a decoded error body.

    Handles ``{"error": {"message": ...}}``, ``{"error": "..."}`` and the
    already unwrapped ``{"message": ...}``. Anything else, including the
    raw text the SDKs keep for non-JSON bodies, yields None.
    """
    if not isinstance(body, dict):
        return None
    error = body.get("error", body)
    if isinstance(error, dict):
        message = error.get("message")
    else:
        message = error
    if isinstance(message, str) and message.strip():
        return message.strip()
    return None


class BaseChatProvider(ABC):
    """Base class for chat provider adapters.

    One SDK client is kept per credential so a signed-in user reuses
    the same connection pool across turns.
    """

    descriptor: ClassVar[ProviderDescriptor]
    default_model: ClassVar[str]

    def __init__(
        self,
        settings: LLMSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize provider.

        Args:
            settings: LLM configuration settings
            http_client: Transport override, mainly for tests
        """
        self._settings = settings or LLMSettings()
        self._http_client = http_client
        self._clients: dict[str, Any] = {}

    @property
    def name(self) -> str:
        return self.descriptor.name

    async def chat(
        self,
        messages: Sequence[Message],
        options: RequestOptions | None = None,
        credential: str | None = None,
    ) -> str:
        """Send one conversation turn and return the reply text."""
        if self.descriptor.auth_required and not credential:
            raise AuthRequiredError(self.name)

        resolved = (options or RequestOptions()).resolve(self.default_model)
        client = self._client_for(credential or "")

        logger.debug(
            "provider_call_started",
            provider=self.name,
            model=resolved.model,
            message_count=len(messages),
        )
        try:
            reply = await self._complete(client, list(messages), resolved)
        except ChatError:
            raise
        except Exception as e:
            error = self._translate_error(e)
            if error is None:
                raise
            logger.warning("provider_call_failed", provider=self.name, error=str(error))
            raise error from e

        if not reply or not reply.strip():
            logger.warning("provider_empty_response", provider=self.name, model=resolved.model)
            raise EmptyResponseError(self.descriptor.label)

        logger.debug("provider_call_finished", provider=self.name, reply_length=len(reply))
        return reply

    async def close(self) -> None:
        """Close every cached SDK client."""
        clients = list(self._clients.values())
        self._clients.clear()
        for client in clients:
            await client.close()

    def _client_for(self, credential: str) -> Any:
        client = self._clients.get(credential)
        if client is None:
            client = self._create_client(credential)
            self._clients[credential] = client
        return client

    def _status_error(
        self,
        status_code: int,
        response: httpx.Response | None,
        body: object,
    ) -> ProviderError:
        """Build a ProviderError from an SDK status exception."""
        reason = response.reason_phrase if response is not None else ""
        return ProviderError(
            self.descriptor.label,
            status_code,
            reason,
            extract_error_message(body),
        )

    @abstractmethod
    def _create_client(self, credential: str) -> Any:
        """Build the vendor SDK client for a credential."""
        ...

    @abstractmethod
    async def _complete(
        self,
        client: Any,
        messages: list[Message],
        options: RequestOptions,
    ) -> str | None:
        """Issue the vendor request and return the raw reply text."""
        ...

    @abstractmethod
    def _translate_error(self, error: Exception) -> ChatError | None:
        """Map an SDK exception to the chat error taxonomy.

        Returns None for exceptions that are not transport or API errors.
        """
        ...

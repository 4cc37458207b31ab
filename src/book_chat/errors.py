"""Error taxonomy for book_chat.

Every failure a chat turn can hit is a ``ChatError``. The conversation
controller catches them and shows ``user_message`` in its error state;
none of them escape to the surrounding application.
"""

__all__ = [
    "ChatError",
    "ProviderUnavailableError",
    "AuthRequiredError",
    "NetworkError",
    "ProviderError",
    "EmptyResponseError",
]


class ChatError(Exception):
    """Base class for chat turn failures."""

    default_message = "Failed to send message"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        """Message suitable for the error banner."""
        return str(self)


class ProviderUnavailableError(ChatError):
    """The selected provider name is not registered."""

    default_message = "Selected LLM provider not available"

    def __init__(self, name: str) -> None:
        self.provider = name
        super().__init__()


class AuthRequiredError(ChatError):
    """A credential is mandatory for the provider and none was supplied."""

    default_message = "Please log in to use the chatbot"

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__()


class NetworkError(ChatError):
    """The provider could not be reached (DNS, reset, timeout)."""

    def __init__(self, provider: str, detail: str = "") -> None:
        self.provider = provider
        self.detail = detail
        message = f"Could not reach {provider}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ProviderError(ChatError):
    """The provider answered with a non-success status.

    Attributes:
        status_code: HTTP status returned by the provider
        reason: HTTP reason phrase (may be empty)
        provider_message: Error text from the provider's JSON body, if any
    """

    def __init__(
        self,
        provider: str,
        status_code: int,
        reason: str = "",
        provider_message: str | None = None,
    ) -> None:
        self.provider = provider
        self.status_code = status_code
        self.reason = reason
        self.provider_message = provider_message

        status_line = f"{status_code} {reason}".strip()
        message = f"{provider} API error: {status_line}"
        if provider_message:
            message = f"{message} - {provider_message}"
        super().__init__(message)


class EmptyResponseError(ChatError):
    """The provider answered successfully but without reply text."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"No response from {provider}")

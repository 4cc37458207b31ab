"""book_chat - Ask a language model about the text you are reading.

This package provides the chat orchestration core of a reader:
- Provider adapters for OpenAI and Anthropic compatible APIs
- Book context extraction from the open book and reading view
- Prompt assembly with a freshly synthesized system prompt
- A conversation state machine with single-flight requests

Example usage:
    from book_chat import ConversationController, ProviderRegistry

    registry = ProviderRegistry.create_default()
    controller = ConversationController(
        registry,
        book,
        view,
        selected_text,
        credential=api_key,
    )
    state = await controller.ask("What does this passage mean?")
"""

__version__ = "0.1.0"

from book_chat.config import BookChatConfig, ContextSettings, LLMSettings, LoggingSettings
from book_chat.conversation import ConversationController
from book_chat.errors import (
    AuthRequiredError,
    ChatError,
    EmptyResponseError,
    NetworkError,
    ProviderError,
    ProviderUnavailableError,
)
from book_chat.infra.llm.anthropic_provider import AnthropicProvider
from book_chat.infra.llm.openai_provider import OpenAIProvider
from book_chat.interfaces.llm import ChatProviderInterface
from book_chat.interfaces.preferences import PreferenceStore
from book_chat.interfaces.reader import BookInterface, ReadingViewInterface
from book_chat.models import (
    BookContext,
    ChatPreference,
    ConversationState,
    ConversationStatus,
    Message,
    ProviderDescriptor,
    RequestOptions,
    Turn,
)
from book_chat.providers.registry import ProviderRegistry, default_registry
from book_chat.services.context_builder import ContextBuilder
from book_chat.services.preferences import InMemoryPreferenceStore
from book_chat.services.prompt_assembler import PromptAssembler

__all__ = [  # noqa: RUF022
    # Controller
    "ConversationController",
    # Services
    "ContextBuilder",
    "PromptAssembler",
    "InMemoryPreferenceStore",
    # Providers
    "ProviderRegistry",
    "default_registry",
    "OpenAIProvider",
    "AnthropicProvider",
    # Interfaces
    "BookInterface",
    "ChatProviderInterface",
    "PreferenceStore",
    "ReadingViewInterface",
    # Models
    "BookContext",
    "ChatPreference",
    "ConversationState",
    "ConversationStatus",
    "Message",
    "ProviderDescriptor",
    "RequestOptions",
    "Turn",
    # Errors
    "ChatError",
    "ProviderUnavailableError",
    "AuthRequiredError",
    "NetworkError",
    "ProviderError",
    "EmptyResponseError",
    # Config
    "BookChatConfig",
    "ContextSettings",
    "LLMSettings",
    "LoggingSettings",
]

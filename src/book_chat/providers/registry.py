"""Provider registry for book_chat.

This module maps provider names to chat provider adapters.
"""

from functools import lru_cache

from book_chat.config import LLMSettings
from book_chat.interfaces.llm import ChatProviderInterface
from book_chat.models.provider import ModelOption, ProviderDescriptor, ProviderOption

__all__ = [
    "LOGIN_REQUIRED_SUFFIX",
    "ProviderRegistry",
    "default_registry",
]

LOGIN_REQUIRED_SUFFIX = " (Login Required)"


class ProviderRegistry:
    """Registry of chat provider adapters.

    Holds adapter bindings only, no request state. Build it once at
    startup and treat it as read-only afterwards.

    Example:
        registry = ProviderRegistry.create_default()
        provider = registry.get_provider("openai")
        if provider is None:
            ...  # show "provider not available"
    """

    def __init__(self, providers: list[ChatProviderInterface] | None = None) -> None:
        self._providers: dict[str, ChatProviderInterface] = {}
        for provider in providers or []:
            self.register(provider)

    @classmethod
    def create_default(cls, settings: LLMSettings | None = None) -> "ProviderRegistry":
        """Build the registry with the built-in OpenAI and Anthropic adapters.

        Args:
            settings: LLM settings shared by the adapters

        Returns:
            ProviderRegistry instance
        """
        from book_chat.infra.llm.anthropic_provider import AnthropicProvider
        from book_chat.infra.llm.openai_provider import OpenAIProvider

        settings = settings or LLMSettings()
        return cls([OpenAIProvider(settings), AnthropicProvider(settings)])

    def register(self, provider: ChatProviderInterface) -> None:
        """Register a provider adapter.

        Raises:
            ValueError: If a provider with the same name is already registered
        """
        name = provider.descriptor.name
        if name in self._providers:
            raise ValueError(f"Provider already registered: {name}")
        self._providers[name] = provider

    def get_provider(self, name: str) -> ChatProviderInterface | None:
        """Look up a provider by name. Unknown names return None."""
        return self._providers.get(name)

    def list_providers(self) -> list[ProviderDescriptor]:
        """Descriptors of all registered providers, in registration order."""
        return [p.descriptor for p in self._providers.values()]

    def provider_options(self, has_credential: bool) -> list[ProviderOption]:
        """Entries for a provider picker.

        Providers that need a credential the user does not have are
        still listed, with a login hint appended to the label.
        """
        options = []
        for descriptor in self.list_providers():
            available = has_credential or not descriptor.auth_required
            label = descriptor.label if available else descriptor.label + LOGIN_REQUIRED_SUFFIX
            options.append(ProviderOption(name=descriptor.name, label=label, available=available))
        return options

    def list_models(self, name: str) -> list[ModelOption]:
        """Declared models of a provider; empty for unknown names."""
        provider = self._providers.get(name)
        return list(provider.descriptor.models) if provider else []

    def default_model(self, name: str) -> str | None:
        """First declared model of a provider, if any."""
        provider = self._providers.get(name)
        return provider.descriptor.first_model if provider else None

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    async def close(self) -> None:
        """Close every registered adapter."""
        for provider in self._providers.values():
            await provider.close()


@lru_cache(maxsize=1)
def default_registry() -> ProviderRegistry:
    """Process-wide registry built from environment settings."""
    return ProviderRegistry.create_default()

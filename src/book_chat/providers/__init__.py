"""Provider lookup for book_chat."""

from book_chat.providers.registry import ProviderRegistry, default_registry

__all__ = ["ProviderRegistry", "default_registry"]

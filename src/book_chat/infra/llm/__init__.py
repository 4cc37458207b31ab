"""LLM provider implementations for book_chat."""

from book_chat.infra.llm.anthropic_provider import AnthropicProvider
from book_chat.infra.llm.openai_provider import OpenAIProvider

__all__ = ["OpenAIProvider", "AnthropicProvider"]

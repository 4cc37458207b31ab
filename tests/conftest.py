"""Shared test fixtures for book_chat.

This module provides pytest fixtures used across all tests.
"""

import pytest

from book_chat.config import BookChatConfig, ContextSettings, LLMSettings
from book_chat.models.context import BookContext
from book_chat.models.message import Turn
from book_chat.providers.registry import ProviderRegistry
from book_chat.services.context_builder import ContextBuilder
from book_chat.services.preferences import InMemoryPreferenceStore
from tests.mocks.mock_provider import ScriptedProvider
from tests.mocks.mock_reader import FakeBook, FakeView


# Settings fixtures
@pytest.fixture
def llm_settings() -> LLMSettings:
    """LLM settings independent of the environment."""
    return LLMSettings(
        provider="scripted",
        model="scripted-large",
        temperature=0.7,
        max_tokens=1000,
        request_timeout=5.0,
    )


@pytest.fixture
def context_settings() -> ContextSettings:
    """Context settings independent of the environment."""
    return ContextSettings(max_context_chars=2000, preview_chars=100, default_language="en")


@pytest.fixture
def config(llm_settings: LLMSettings, context_settings: ContextSettings) -> BookChatConfig:
    """Full configuration."""
    return BookChatConfig(llm=llm_settings, context=context_settings)


# Reader fixtures
@pytest.fixture
def book() -> FakeBook:
    """Open book."""
    return FakeBook()


@pytest.fixture
def view() -> FakeView:
    """Live reading view."""
    return FakeView()


@pytest.fixture
def context_builder(context_settings: ContextSettings) -> ContextBuilder:
    """Context builder with default limits."""
    return ContextBuilder(context_settings)


# Provider fixtures
@pytest.fixture
def scripted_provider() -> ScriptedProvider:
    """Provider answering every call with a fixed reply."""
    return ScriptedProvider(script=["The narrator is omniscient."])


@pytest.fixture
def registry(scripted_provider: ScriptedProvider) -> ProviderRegistry:
    """Registry holding only the scripted provider."""
    return ProviderRegistry([scripted_provider])


@pytest.fixture
def preferences() -> InMemoryPreferenceStore:
    """Empty preference store."""
    return InMemoryPreferenceStore()


# Sample data fixtures
@pytest.fixture
def sample_context() -> BookContext:
    """Context with every optional field set."""
    return BookContext(
        book_title="Pride and Prejudice",
        author="Jane Austen",
        selected_text="a single man in possession of a good fortune",
        current_chapter="Chapter 1",
        current_page_context="It is a truth universally acknowledged...",
        language="en",
    )


@pytest.fixture
def sample_turns() -> list[Turn]:
    """Two earlier turns."""
    return [
        Turn(id="t1", role="user", content="Who says this?", timestamp=1704067200.0),
        Turn(id="t2", role="assistant", content="The narrator.", timestamp=1704067201.0),
    ]

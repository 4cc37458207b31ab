"""Service layer for book_chat.

This module exports the main service entry points.
"""

from book_chat.services.context_builder import ContextBuilder
from book_chat.services.preferences import InMemoryPreferenceStore
from book_chat.services.prompt_assembler import PromptAssembler

__all__ = [
    "ContextBuilder",
    "InMemoryPreferenceStore",
    "PromptAssembler",
]

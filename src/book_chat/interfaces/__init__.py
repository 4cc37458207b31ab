"""Interface contracts for book_chat.

This module exports all Protocol-based interfaces for dependency injection.
"""

from book_chat.interfaces.llm import ChatProviderInterface
from book_chat.interfaces.preferences import PreferenceStore
from book_chat.interfaces.reader import BookInterface, ReadingViewInterface

__all__ = [
    "BookInterface",
    "ChatProviderInterface",
    "PreferenceStore",
    "ReadingViewInterface",
]

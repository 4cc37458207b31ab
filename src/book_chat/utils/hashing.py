"""Hashing utilities for book_chat.

This module provides hash functions for generating identifiers
for conversations and turns.
"""

import hashlib
from typing import Any

__all__ = [
    "generate_session_id",
    "generate_turn_id",
    "hash_text",
    "stable_hash",
]


def hash_text(text: str) -> str:
    """Generate SHA256 hash of text.

    Args:
        text: Input text to hash

    Returns:
        Hexadecimal SHA256 hash string
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def stable_hash(*args: Any) -> str:
    """Generate a stable hash from multiple arguments.

    Converts all arguments to strings and joins them with pipe separator.

    Args:
        *args: Values to include in the hash

    Returns:
        Hexadecimal SHA256 hash string
    """
    combined = "|".join(str(arg) for arg in args)
    return hash_text(combined)


def generate_session_id(book_title: str, selected_text: str, created_ns: int) -> str:
    """Generate a conversation ID.

    Args:
        book_title: Title of the open book
        selected_text: Text the conversation is about
        created_ns: Creation time in nanoseconds

    Returns:
        Short hexadecimal hash string
    """
    return stable_hash("session", book_title, selected_text, created_ns)[:16]


def generate_turn_id(session_id: str, sequence: int, role: str, timestamp: float) -> str:
    """Generate a turn ID unique within a conversation.

    The sequence number keeps IDs distinct for turns created within the
    same clock tick.

    Args:
        session_id: Parent conversation ID
        sequence: Position of the turn in the conversation
        role: Turn role
        timestamp: Turn creation time (epoch seconds)

    Returns:
        Short hexadecimal hash string
    """
    return stable_hash("turn", session_id, sequence, role, timestamp)[:16]

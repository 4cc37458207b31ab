"""Utility functions for book_chat.

This module contains internal utility functions.
"""

from book_chat.utils.hashing import (
    generate_session_id,
    generate_turn_id,
    hash_text,
    stable_hash,
)

__all__ = [
    "generate_session_id",
    "generate_turn_id",
    "hash_text",
    "stable_hash",
]

"""Test doubles for book_chat."""

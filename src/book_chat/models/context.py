"""Book context model for book_chat."""

from pydantic import BaseModel

__all__ = [
    "BookContext",
]


class BookContext(BaseModel, frozen=True):
    """Bounded snapshot of what the reader is looking at.

    Built fresh for every request and never stored. Text fields are
    already truncated by the ContextBuilder.
    """

    book_title: str
    author: str
    selected_text: str
    current_chapter: str | None = None
    current_page_context: str | None = None
    language: str | None = None

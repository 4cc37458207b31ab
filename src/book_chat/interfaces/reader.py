"""Reader-side interfaces consumed by book_chat.

The surrounding reading application supplies objects satisfying these
Protocols; book_chat never renders or owns them.
"""

from typing import Protocol, runtime_checkable

__all__ = [
    "BookInterface",
    "ReadingViewInterface",
]


@runtime_checkable
class BookInterface(Protocol):
    """Metadata of the open book. Any field may be missing."""

    title: str | None
    author: str | None
    language: str | None


@runtime_checkable
class ReadingViewInterface(Protocol):
    """Live reading view.

    Both methods inspect rendered content and may raise; callers must
    treat failures as "not available".
    """

    def current_page_text(self) -> str | None:
        """Text of the currently rendered page."""
        ...

    def current_chapter(self) -> str | None:
        """Title of the chapter being read."""
        ...

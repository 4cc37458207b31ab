"""Context builder service for book_chat.

This module turns live book and view state into a bounded BookContext.
"""

from collections.abc import Callable

from book_chat.config import ContextSettings
from book_chat.interfaces.reader import BookInterface, ReadingViewInterface
from book_chat.logging import get_logger
from book_chat.models.context import BookContext

__all__ = [
    "UNKNOWN_AUTHOR",
    "UNKNOWN_TITLE",
    "ContextBuilder",
]

logger = get_logger(__name__)

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_AUTHOR = "Unknown Author"


class ContextBuilder:
    """Service for building BookContext snapshots.

    Building never fails: anything that cannot be read from the view is
    logged and left out of the context.

    Example:
        builder = ContextBuilder()
        context = builder.build(book, view, "It was the best of times")
    """

    def __init__(self, settings: ContextSettings | None = None) -> None:
        """Initialize builder.

        Args:
            settings: Truncation limits and language fallback
        """
        self._settings = settings or ContextSettings()

    @property
    def max_chars(self) -> int:
        return self._settings.max_context_chars

    def build(
        self,
        book: BookInterface | None,
        view: ReadingViewInterface | None,
        selected_text: str,
        current_page_text: str | None = None,
    ) -> BookContext:
        """Build a context for one request.

        Args:
            book: Open book metadata
            view: Live reading view, if one is rendered
            selected_text: Text the user selected
            current_page_text: Page text supplied by the caller; wins over the view

        Returns:
            BookContext with text fields truncated
        """
        title = _text_attr(book, "title") or UNKNOWN_TITLE
        author = _text_attr(book, "author") or UNKNOWN_AUTHOR
        language = _text_attr(book, "language") or self._settings.default_language

        chapter = None
        page_text = current_page_text or None
        if view is not None:
            chapter = self._extract("current_chapter", view.current_chapter)
            if page_text is None:
                page_text = self._extract("current_page_context", view.current_page_text)

        return BookContext(
            book_title=title,
            author=author,
            selected_text=self.truncate(selected_text),
            current_chapter=chapter,
            current_page_context=self.truncate(page_text) if page_text else None,
            language=language,
        )

    def truncate(self, text: str) -> str:
        """Cut text to the configured context limit."""
        return text[: self.max_chars]

    def preview(self, selected_text: str) -> str:
        """Short form of the selection for display above the conversation."""
        limit = self._settings.preview_chars
        if len(selected_text) > limit:
            return selected_text[:limit] + "..."
        return selected_text

    def _extract(self, field: str, getter: Callable[[], str | None]) -> str | None:
        """Read one optional field from the view, or None if it cannot be read."""
        try:
            value = getter()
        except Exception as e:
            logger.warning("context_extraction_failed", field=field, error=str(e))
            return None
        if not isinstance(value, str) or not value.strip():
            return None
        return value


def _text_attr(obj: object, name: str) -> str | None:
    value = getattr(obj, name, None)
    if isinstance(value, str) and value.strip():
        return value
    return None

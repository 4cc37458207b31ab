"""Preference storage interface for book_chat."""

from typing import Protocol, runtime_checkable

from book_chat.models.provider import ChatPreference

__all__ = [
    "PreferenceStore",
]


@runtime_checkable
class PreferenceStore(Protocol):
    """Where the user's provider/model choice lives between sessions."""

    def load(self) -> ChatPreference | None:
        """Return the stored preference, or None if never saved."""
        ...

    def save(self, preference: ChatPreference) -> None:
        """Persist a new preference."""
        ...

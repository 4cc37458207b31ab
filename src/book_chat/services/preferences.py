"""Preference stores for book_chat."""

from book_chat.models.provider import ChatPreference

__all__ = [
    "InMemoryPreferenceStore",
]


class InMemoryPreferenceStore:
    """Keeps the provider/model preference for the life of the process.

    The reading application usually wraps its own settings storage
    instead; this store serves embedding apps without one, and tests.
    """

    def __init__(self, initial: ChatPreference | None = None) -> None:
        self._preference = initial
        self.history: list[ChatPreference] = []

    def load(self) -> ChatPreference | None:
        return self._preference

    def save(self, preference: ChatPreference) -> None:
        self._preference = preference
        self.history.append(preference)

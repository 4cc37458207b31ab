"""Prompt assembler service for book_chat.

This module builds the canonical message list sent to a provider.
"""

from collections.abc import Sequence

from book_chat.logging import get_logger
from book_chat.models.context import BookContext
from book_chat.models.message import Message, Turn

__all__ = [
    "PromptAssembler",
]

logger = get_logger(__name__)

_INTRO = (
    "You are a helpful AI assistant that answers questions about books and reading. "
    "You have context about the current book and page the user is reading."
)

_OUTRO = (
    "Please answer questions helpfully and accurately based on the book content and "
    "your knowledge. If the user asks about something not directly related to the "
    "selected text or book context, you can still provide helpful general information. "
    "Keep your responses concise but informative."
)


class PromptAssembler:
    """Service for assembling provider message lists.

    The system prompt is synthesized fresh on every call; system
    messages found in the history are dropped so the result always holds
    exactly one.

    Example:
        assembler = PromptAssembler()
        messages = assembler.assemble(context, "Who is speaking here?", turns)
    """

    def build_system_prompt(self, context: BookContext) -> str:
        """Render the system prompt for a context.

        Optional fields that are missing leave no header behind.
        """
        book_info = [
            "Book Information:",
            f'- Title: "{context.book_title}"',
            f'- Author: "{context.author}"',
        ]
        if context.language:
            book_info.append(f"- Language: {context.language}")
        if context.current_chapter:
            book_info.append(f'- Chapter: "{context.current_chapter}"')

        sections = [
            _INTRO,
            "\n".join(book_info),
            f'Selected Text: "{context.selected_text}"',
        ]
        if context.current_page_context:
            sections.append(f'Current Page Context:\n"{context.current_page_context}"')
        sections.append(_OUTRO)
        return "\n\n".join(sections)

    def assemble(
        self,
        context: BookContext,
        new_user_message: str,
        prior_turns: Sequence[Turn | Message] = (),
    ) -> list[Message]:
        """Build the ordered message list for one request.

        Args:
            context: Book context for this request
            new_user_message: Text the user just submitted
            prior_turns: Earlier conversation, oldest first

        Returns:
            System message, prior user/assistant messages, then the new user message
        """
        history = [_as_message(t) for t in prior_turns]
        kept = [m for m in history if m.role != "system"]
        if len(kept) != len(history):
            logger.debug("system_messages_dropped", count=len(history) - len(kept))

        return [
            Message(role="system", content=self.build_system_prompt(context)),
            *kept,
            Message(role="user", content=new_user_message),
        ]


def _as_message(item: Turn | Message) -> Message:
    return item.to_message() if isinstance(item, Turn) else item

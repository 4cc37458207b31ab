"""Conversation controller for book_chat.

This module owns the turn state machine of one chat session: it records
turns, runs at most one provider call at a time, and turns every failure
into a user-visible error state.
"""

import asyncio
import time
from collections.abc import Callable, Sequence

from book_chat.config import BookChatConfig
from book_chat.errors import AuthRequiredError, ChatError, ProviderUnavailableError
from book_chat.interfaces.llm import ChatProviderInterface
from book_chat.interfaces.preferences import PreferenceStore
from book_chat.interfaces.reader import BookInterface, ReadingViewInterface
from book_chat.logging import get_logger
from book_chat.models.conversation import ConversationState, ConversationStatus
from book_chat.models.message import Turn, TurnRole
from book_chat.models.provider import ChatPreference, ModelOption, ProviderOption, RequestOptions
from book_chat.providers.registry import ProviderRegistry
from book_chat.services.context_builder import ContextBuilder
from book_chat.services.prompt_assembler import PromptAssembler
from book_chat.utils.hashing import generate_session_id, generate_turn_id

__all__ = ["ConversationController", "StateListener"]

logger = get_logger(__name__)

StateListener = Callable[[ConversationState], None]


class ConversationController:
    """State machine behind one chat popup.

    ``submit`` is the only way to add turns. It appends the user turn
    synchronously and hands the provider call to the running event loop;
    while that call is in flight further submits are ignored. Observers
    get a fresh ConversationState after every change.

    Example:
        controller = ConversationController(registry, book, view, selection)
        controller.subscribe(render)
        task = controller.submit("Who is the narrator?")
        if task is not None:
            await task
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        book: BookInterface | None,
        view: ReadingViewInterface | None,
        selected_text: str,
        *,
        credential: str | None = None,
        preferences: PreferenceStore | None = None,
        context_builder: ContextBuilder | None = None,
        prompt_assembler: PromptAssembler | None = None,
        current_page_text: str | None = None,
        config: BookChatConfig | None = None,
    ) -> None:
        """Initialize a conversation.

        Args:
            registry: Provider registry
            book: Open book metadata
            view: Live reading view
            selected_text: Text the conversation is about
            credential: API key of the signed-in user, if any
            preferences: Store for the provider/model choice
            context_builder: Context builder (defaults to one built from config)
            prompt_assembler: Prompt assembler
            current_page_text: Page text that overrides what the view reports
            config: Settings (loaded from the environment when omitted)
        """
        self._config = config or BookChatConfig()
        self._registry = registry
        self._book = book
        self._view = view
        self._selected_text = selected_text
        self._current_page_text = current_page_text
        self._credential = credential
        self._preferences = preferences
        self._context_builder = context_builder or ContextBuilder(self._config.context)
        self._assembler = prompt_assembler or PromptAssembler()

        stored = preferences.load() if preferences is not None else None
        self._provider = stored.provider if stored else self._config.llm.provider
        self._model = stored.model if stored else self._config.llm.model

        self._turns: list[Turn] = []
        self._status = ConversationStatus.IDLE
        self._error: str | None = None
        self._pending: asyncio.Task[None] | None = None
        self._listeners: list[StateListener] = []
        self._closed = False

        title = getattr(book, "title", None) or ""
        self._session_id = generate_session_id(title, selected_text, time.time_ns())
        self._log = logger.bind(session_id=self._session_id)

    # Snapshot accessors

    @property
    def state(self) -> ConversationState:
        """Current immutable snapshot."""
        return ConversationState(
            session_id=self._session_id,
            turns=tuple(self._turns),
            provider=self._provider,
            model=self._model,
            status=self._status,
            error=self._error,
        )

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def status(self) -> ConversationStatus:
        return self._status

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def model(self) -> str:
        return self._model

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def selected_text_preview(self) -> str:
        return self._context_builder.preview(self._selected_text)

    def provider_options(self) -> list[ProviderOption]:
        """Provider picker entries, with login hints when signed out."""
        return self._registry.provider_options(has_credential=bool(self._credential))

    def available_models(self) -> list[ModelOption]:
        """Models declared by the current provider."""
        return self._registry.list_models(self._provider)

    # Observers

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state observer.

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Turn lifecycle

    def submit(self, text: str) -> asyncio.Task[None] | None:
        """Start a new turn.

        Empty input, a request already in flight, or a closed conversation
        make this a no-op. Only a turn that reaches the provider needs the
        running event loop.

        Args:
            text: What the user typed

        Returns:
            The task running the provider call, or None when nothing was sent
        """
        content = text.strip()
        if self._closed or not content or self._status is ConversationStatus.SENDING:
            self._log.debug("chat_submit_ignored", status=self._status.value, closed=self._closed)
            return None

        history = list(self._turns)
        self._append_turn("user", content)
        self._error = None
        self._status = ConversationStatus.SENDING

        provider = self._registry.get_provider(self._provider)
        if provider is None:
            self._fail(ProviderUnavailableError(self._provider))
            return None
        if provider.descriptor.auth_required and not self._credential:
            self._fail(AuthRequiredError(self._provider))
            return None

        self._log.info("chat_submitted", provider=self._provider, model=self._model)
        self._notify()

        options = RequestOptions(
            model=self._model,
            temperature=self._config.llm.temperature,
            max_tokens=self._config.llm.max_tokens,
        )
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run(provider, content, history, options, self._credential))
        self._pending = task
        return task

    async def ask(self, text: str) -> ConversationState:
        """Submit and wait for the turn to settle."""
        task = self.submit(text)
        if task is not None:
            await task
        return self.state

    async def _run(
        self,
        provider: ChatProviderInterface,
        content: str,
        history: Sequence[Turn],
        options: RequestOptions,
        credential: str | None,
    ) -> None:
        try:
            context = self._context_builder.build(
                self._book,
                self._view,
                self._selected_text,
                self._current_page_text,
            )
            messages = self._assembler.assemble(context, content, history)
            reply = await provider.chat(messages, options, credential)
        except ChatError as e:
            self._settle(error=e)
            return
        except Exception:
            self._log.exception("chat_turn_crashed", provider=provider.descriptor.name)
            self._settle(error=ChatError())
            return
        self._settle(reply=reply)

    def _settle(
        self,
        reply: str | None = None,
        error: ChatError | None = None,
    ) -> None:
        self._pending = None
        if self._closed:
            self._log.debug("chat_result_discarded")
            return
        if error is not None:
            self._fail(error)
            return
        self._append_turn("assistant", reply or "")
        self._status = ConversationStatus.IDLE
        self._log.info("chat_reply_received", turn_count=len(self._turns))
        self._notify()

    def _fail(self, error: ChatError) -> None:
        self._error = error.user_message
        self._status = ConversationStatus.ERROR
        self._log.info("chat_turn_failed", error_type=type(error).__name__, error=self._error)
        self._notify()

    def _append_turn(self, role: TurnRole, content: str) -> Turn:
        timestamp = time.time()
        turn = Turn(
            id=generate_turn_id(self._session_id, len(self._turns), role, timestamp),
            role=role,
            content=content,
            timestamp=timestamp,
        )
        self._turns.append(turn)
        return turn

    # Provider and model selection

    def change_provider(self, name: str) -> None:
        """Switch provider for future turns.

        The model resets to the new provider's first declared model. Turns
        are kept. Unknown providers are accepted; the next submit reports
        them as unavailable.
        """
        if name == self._provider:
            return
        self._provider = name
        first_model = self._registry.default_model(name)
        if first_model is None:
            self._log.warning("provider_without_models", provider=name)
        else:
            self._model = first_model
        self._log.info("provider_changed", provider=name, model=self._model)
        self._save_preference()
        self._notify()

    def change_model(self, model_id: str) -> None:
        """Switch model for future turns; provider and turns are untouched."""
        model_id = model_id.strip()
        if not model_id or model_id == self._model:
            return
        self._model = model_id
        self._log.info("model_changed", provider=self._provider, model=model_id)
        self._save_preference()
        self._notify()

    def set_credential(self, credential: str | None) -> None:
        """Update the signed-in user's API key."""
        self._credential = credential or None
        self._notify()

    def _save_preference(self) -> None:
        if self._preferences is not None:
            self._preferences.save(ChatPreference(provider=self._provider, model=self._model))

    # Teardown

    def clear(self) -> bool:
        """Drop all turns and the error.

        Returns:
            False if a request is in flight and nothing was cleared
        """
        if self._status is ConversationStatus.SENDING:
            return False
        self._turns.clear()
        self._error = None
        self._status = ConversationStatus.IDLE
        self._notify()
        return True

    def close(self) -> None:
        """Discard the conversation.

        A request still in flight runs to completion but its result is
        dropped.
        """
        if self._closed:
            return
        self._closed = True
        self._listeners.clear()
        self._turns.clear()
        self._log.debug("conversation_closed", in_flight=self._pending is not None)

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                self._log.exception("conversation_listener_failed")

"""Chat session state machine.

A :class:`ChatSession` backs one chat surface. While active it holds one
subscription per observation channel of the chat service (history,
receiving flag, system prompt, extra system prompt, default scopes) and
rebuilds its state from whatever those channels publish. User intents are
forwarded to the service; the session never edits history itself.
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

from ..utils.logging import get_logger
from .history import DEFAULT_TITLE, build_displayed_history, derive_title
from .menu import ChatMenu, ChatMenuState
from .message_model import ChatMessage, DisplayedChatMessage, Reference
from .references import ReferenceOpener

if TYPE_CHECKING:  # pragma: no cover
    from ..core.observable import Subscription
    from .service import ChatService, Scope

StateListener = Callable[["ChatSessionState"], None]


class ChatField(str, Enum):
    """Focusable inputs of the chat surface."""

    TEXT_FIELD = "text_field"


@dataclass(slots=True)
class ChatSessionState:
    """Everything the chat surface renders."""

    title: str = DEFAULT_TITLE
    typed_message: str = ""
    history: list[DisplayedChatMessage] = field(default_factory=list)
    is_receiving_message: bool = False
    focused_field: Optional[ChatField] = None
    chat_menu: ChatMenuState = field(default_factory=ChatMenuState)


class ChatSession:
    """Reconciles a chat service into :class:`ChatSessionState`.

    Lifecycle:
        ``activate()`` starts a new generation of channel subscriptions,
        cancelling the previous generation first, and returns once every
        channel has delivered its current value. ``deactivate()`` cancels the
        subscriptions and the tracked send task.

    Sending:
        ``send()`` clears the typed message immediately and forwards it on a
        background task. Only the most recent send task is tracked; ``stop()``
        cancels it and asks the service to stop receiving.

    Threading:
        Not thread-safe. Call every method from the event loop thread.
    """

    def __init__(
        self,
        service: ChatService,
        *,
        reference_opener: ReferenceOpener | None = None,
        session_id: str | None = None,
    ) -> None:
        self._service = service
        self._id = session_id or uuid.uuid4().hex[:12]
        self._state = ChatSessionState()
        self._menu = ChatMenu(service, self._state.chat_menu, on_change=self._notify)
        self._reference_opener = reference_opener or ReferenceOpener()
        self._subscriptions: list[Subscription] = []
        self._generation = 0
        self._send_task: asyncio.Task[None] | None = None
        self._listeners: list[StateListener] = []
        self._log = get_logger(__name__, session_id=self._id)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def state(self) -> ChatSessionState:
        return self._state

    @property
    def menu(self) -> ChatMenu:
        return self._menu

    @property
    def generation(self) -> int:
        """Number of activations so far; the current generation when active."""
        return self._generation

    @property
    def is_active(self) -> bool:
        return bool(self._subscriptions)

    @property
    def send_task(self) -> asyncio.Task[None] | None:
        """The send currently tracked for cancellation, if any."""
        return self._send_task

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def activate(self) -> None:
        """Start observing the service, focus the input and refresh the menu."""
        self._release_subscriptions()
        self._generation += 1
        service = self._service
        channels = (
            (service.chat_history, self.history_changed),
            (service.is_receiving_message, self.is_receiving_message_changed),
            (service.system_prompt, self.system_prompt_changed),
            (service.extra_system_prompt, self.extra_system_prompt_changed),
            (service.default_scopes, self.default_scopes_changed),
        )
        for observable, handler in channels:
            self._subscriptions.append(observable.subscribe(handler))
        self._log.debug("ChatSession.activate: generation=%d", self._generation)
        self.focus_text_field()
        self.refresh()

    def deactivate(self) -> None:
        """Stop observing the service and cancel the tracked send."""
        self._release_subscriptions()
        self._cancel_send()
        self._log.debug("ChatSession.deactivate: generation=%d", self._generation)

    def _release_subscriptions(self) -> None:
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.cancel()

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def update_typed_message(self, text: str) -> None:
        self._state.typed_message = text
        self._notify()

    def return_pressed(self) -> None:
        """Insert a newline into the typed message."""
        self._state.typed_message += "\n"
        self._notify()

    def focus_text_field(self) -> None:
        self._state.focused_field = ChatField.TEXT_FIELD
        self._notify()

    def refresh(self) -> None:
        self._menu.refresh()

    def send(self, text: str | None = None) -> asyncio.Task[None] | None:
        """Send ``text`` (default: the typed message) to the service.

        Returns ``None`` without touching anything when the message is the
        empty string. Otherwise the typed message is cleared before the
        service sees the text, and the returned task re-raises any error from
        the service when awaited. The clear is not undone on failure.
        """
        message = self._state.typed_message if text is None else text
        if not message:
            return None
        self._state.typed_message = ""
        self._notify()
        task = asyncio.get_running_loop().create_task(
            self._service.send(message), name=f"chat-send-{self._id}"
        )
        task.add_done_callback(self._send_finished)
        self._send_task = task
        self._log.debug("ChatSession.send: length=%d", len(message))
        return task

    async def stop(self) -> None:
        """Cancel the tracked send and tell the service to stop receiving."""
        self._cancel_send()
        await self._service.stop_receiving_message()

    async def clear(self) -> None:
        await self._service.clear_history()

    async def delete(self, message_id: str) -> None:
        await self._service.delete_message(message_id)

    async def resend(self, message_id: str) -> None:
        """Resend ``message_id``; errors from the service propagate."""
        await self._service.resend_message(message_id)

    async def set_as_extra_prompt(self, message_id: str) -> None:
        await self._service.set_message_as_extra_prompt(message_id)

    async def reference_activated(self, reference: Reference) -> None:
        await self._reference_opener.open(reference)

    # ------------------------------------------------------------------
    # Channel reactions
    # ------------------------------------------------------------------

    def history_changed(self, history: Sequence[ChatMessage] | None = None) -> None:
        """Rebuild the transcript and title from a full history snapshot."""
        if history is None:
            history = self._service.chat_history.value
        displayed = build_displayed_history(history)
        self._state.history = displayed
        self._state.title = derive_title(displayed)
        self._log.debug(
            "ChatSession.history_changed: messages=%d, rows=%d", len(history), len(displayed)
        )
        self._notify()

    def is_receiving_message_changed(self, receiving: bool | None = None) -> None:
        if receiving is None:
            receiving = self._service.is_receiving_message.value
        self._state.is_receiving_message = bool(receiving)
        self._notify()

    def system_prompt_changed(self, prompt: str | None = None) -> None:
        if prompt is None:
            prompt = self._service.system_prompt.value
        self._menu.system_prompt_changed(prompt)

    def extra_system_prompt_changed(self, prompt: str | None = None) -> None:
        if prompt is None:
            prompt = self._service.extra_system_prompt.value
        self._menu.extra_system_prompt_changed(prompt)

    def default_scopes_changed(self, scopes: frozenset[Scope] | None = None) -> None:
        if scopes is None:
            scopes = self._service.default_scopes.value
        self._menu.default_scopes_changed(scopes)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_state_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def remove_state_listener(self, listener: StateListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _notify(self) -> None:
        for listener in tuple(self._listeners):
            try:
                listener(self._state)
            except Exception:
                self._log.exception("State listener %r raised", listener)

    # ------------------------------------------------------------------
    # Internal Helpers
    # ------------------------------------------------------------------

    def _cancel_send(self) -> None:
        task = self._send_task
        self._send_task = None
        if task is not None and not task.done():
            self._log.debug("ChatSession: cancelling tracked send")
            task.cancel()

    def _send_finished(self, task: asyncio.Task[Any]) -> None:
        if self._send_task is task:
            self._send_task = None
        if task.cancelled():
            self._log.debug("ChatSession: send cancelled")
            return
        error = task.exception()
        if error is not None:
            self._log.debug("ChatSession: send failed: %s", error)


__all__ = ["ChatField", "ChatSession", "ChatSessionState", "StateListener"]

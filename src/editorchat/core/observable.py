"""Observable values with explicit subscription handles.

The chat service exposes its history, receiving flag, prompts and default
scopes as :class:`Observable` instances. Consumers subscribe with a callback
and receive a :class:`Subscription`; the handle is the only way to stop
delivery, so every subscriber owns the lifetime of its listener.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Callable, Generic, TypeVar

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

# Callback invoked with the new value on every publication
Callback = Callable[[T], None]


class Subscription:
    """Handle returned by :meth:`Observable.subscribe`.

    Cancelling is idempotent. A cancelled subscription never sees another
    value, including values published while a delivery loop is running.
    """

    __slots__ = ("_observable", "_callback", "_active")

    def __init__(self, observable: Observable, callback: Callback) -> None:
        self._observable: Observable | None = observable
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        """Return ``True`` until :meth:`cancel` is called."""
        return self._active

    def cancel(self) -> None:
        """Detach the callback from its observable."""
        if not self._active:
            return
        self._active = False
        observable, self._observable = self._observable, None
        if observable is not None:
            observable._detach(self)

    def _deliver(self, value: object) -> None:
        if self._active:
            self._callback(value)


class Observable(Generic[T]):
    """A current value plus the callbacks interested in its changes.

    Example::

        history: Observable[list[ChatMessage]] = Observable([], name="chat_history")
        subscription = history.subscribe(lambda messages: print(len(messages)))
        history.set([message])
        subscription.cancel()

    Every :meth:`set` publishes, even when the new value equals the old one.
    Delivery is synchronous and ordered; a callback that raises is logged and
    the remaining subscribers still receive the value. A callback that calls
    :meth:`set` again supersedes the value being delivered: subscribers not yet
    reached receive only the newer value, so the last write wins everywhere.
    """

    __slots__ = ("_value", "_subscriptions", "_name", "_version")

    def __init__(self, value: T, *, name: str = "") -> None:
        self._value = value
        self._subscriptions: list[Subscription] = []
        self._name = name or "observable"
        self._version = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> T:
        """Return the most recently published value."""
        return self._value

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Store ``value`` and publish it to every active subscriber."""
        self._value = value
        self._version += 1
        version = self._version
        subscriptions = tuple(self._subscriptions)
        for subscription in subscriptions:
            if self._version != version:
                LOGGER.debug("%s: value superseded during delivery", self._name)
                break
            try:
                subscription._deliver(value)
            except Exception:
                LOGGER.exception("Subscriber of %s raised while handling a change", self._name)

    def update(self, transform: Callable[[T], T]) -> T:
        """Publish ``transform(current)`` and return it."""
        value = transform(self._value)
        self.set(value)
        return value

    def subscribe(self, callback: Callback, *, deliver_current: bool = True) -> Subscription:
        """Register ``callback`` and return its cancellation handle.

        Args:
            callback: Invoked with each published value.
            deliver_current: When ``True`` the current value is delivered
                before this method returns.
        """
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        LOGGER.debug("Subscribed to %s (%d active)", self._name, len(self._subscriptions))
        if deliver_current:
            subscription._deliver(self._value)
        return subscription

    def subscriber_count(self) -> int:
        """Return the number of active subscriptions."""
        return len(self._subscriptions)

    async def changes(self) -> AsyncIterator[T]:
        """Yield the current value and every later one until the consumer stops.

        The underlying subscription is released when the generator is closed
        or the consuming task is cancelled.
        """
        queue: asyncio.Queue[T] = asyncio.Queue()
        subscription = self.subscribe(queue.put_nowait)
        try:
            while True:
                yield await queue.get()
        finally:
            subscription.cancel()

    def _detach(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            return
        LOGGER.debug("Unsubscribed from %s (%d active)", self._name, len(self._subscriptions))

    def __repr__(self) -> str:
        return f"Observable(name={self._name!r}, value={self._value!r})"


__all__ = ["Callback", "Observable", "Subscription"]

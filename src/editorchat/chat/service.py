"""Interface of the chat service the session observes and drives.

The service owns the conversation: it persists history, talks to the model
and publishes every change through its observables. The session only reads
those values and forwards user intents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover
    from ..core.observable import Observable
    from .commands import CustomCommand
    from .message_model import ChatMessage


class Scope(str, Enum):
    """Context categories that can be attached to every chat request."""

    FILE = "file"
    CODE = "code"
    SENSE = "sense"
    PROJECT = "project"
    WEB = "web"


@dataclass(slots=True)
class OverridingConfiguration:
    """Per-conversation overrides of the global model settings."""

    temperature: Optional[float] = None
    model_id: Optional[str] = None


@dataclass(slots=True)
class ChatConfiguration:
    """Mutable configuration held by a chat service."""

    overriding: OverridingConfiguration = field(default_factory=OverridingConfiguration)


@runtime_checkable
class ChatService(Protocol):
    """Protocol implemented by chat services consumed by :class:`ChatSession`."""

    chat_history: Observable[list[ChatMessage]]
    is_receiving_message: Observable[bool]
    system_prompt: Observable[str]
    extra_system_prompt: Observable[str]
    default_scopes: Observable[frozenset[Scope]]
    configuration: ChatConfiguration

    async def send(self, content: str) -> None:
        """Send a user message; may raise."""
        ...

    async def stop_receiving_message(self) -> None:
        ...

    async def clear_history(self) -> None:
        ...

    async def delete_message(self, message_id: str) -> None:
        ...

    async def resend_message(self, message_id: str) -> None:
        """Resend a message; raises when ``message_id`` is unknown."""
        ...

    async def set_message_as_extra_prompt(self, message_id: str) -> None:
        ...

    async def reset_prompt(self) -> None:
        ...

    async def handle_custom_command(self, command: CustomCommand) -> None:
        """Run a user-defined command; may raise."""
        ...

    def reset_default_scopes(self) -> None:
        ...


__all__ = ["ChatConfiguration", "ChatService", "OverridingConfiguration", "Scope"]

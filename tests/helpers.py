"""Shared test helpers and stub classes.

Import from here instead of duplicating these classes in individual test files.
"""

from __future__ import annotations

import asyncio
from typing import Any, Iterable

from editorchat.chat.commands import CustomCommand
from editorchat.chat.message_model import ChatMessage, ChatRole, ToolCall, ToolCallResponse
from editorchat.chat.service import ChatConfiguration, Scope
from editorchat.core.observable import Observable


class FakeChatService:
    """In-memory chat service that records every call it receives.

    Mutating operations publish through the observables the same way a real
    service would, so sessions observing it see full history snapshots.
    """

    def __init__(self, history: Iterable[ChatMessage] = ()) -> None:
        self.chat_history: Observable[list[ChatMessage]] = Observable(list(history), name="chat_history")
        self.is_receiving_message: Observable[bool] = Observable(False, name="is_receiving_message")
        self.system_prompt: Observable[str] = Observable("", name="system_prompt")
        self.extra_system_prompt: Observable[str] = Observable("", name="extra_system_prompt")
        self.default_scopes: Observable[frozenset[Scope]] = Observable(frozenset(), name="default_scopes")
        self.configuration = ChatConfiguration()
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.send_error: Exception | None = None
        self.send_gate: asyncio.Event | None = None
        self.command_error: Exception | None = None
        self.reset_scopes_to: frozenset[Scope] = frozenset({Scope.FILE})

    # -- helpers -----------------------------------------------------------

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def subscriber_counts(self) -> dict[str, int]:
        return {
            observable.name: observable.subscriber_count()
            for observable in (
                self.chat_history,
                self.is_receiving_message,
                self.system_prompt,
                self.extra_system_prompt,
                self.default_scopes,
            )
        }

    def _find(self, message_id: str) -> ChatMessage | None:
        for message in self.chat_history.value:
            if message.id == message_id:
                return message
        return None

    # -- ChatService -------------------------------------------------------

    async def send(self, content: str) -> None:
        self.calls.append(("send", (content,)))
        if self.send_gate is not None:
            await self.send_gate.wait()
        if self.send_error is not None:
            raise self.send_error

    async def stop_receiving_message(self) -> None:
        self.calls.append(("stop_receiving_message", ()))
        self.is_receiving_message.set(False)

    async def clear_history(self) -> None:
        self.calls.append(("clear_history", ()))
        self.chat_history.set([])

    async def delete_message(self, message_id: str) -> None:
        self.calls.append(("delete_message", (message_id,)))
        self.chat_history.set([m for m in self.chat_history.value if m.id != message_id])

    async def resend_message(self, message_id: str) -> None:
        self.calls.append(("resend_message", (message_id,)))
        if self._find(message_id) is None:
            raise KeyError(message_id)

    async def set_message_as_extra_prompt(self, message_id: str) -> None:
        self.calls.append(("set_message_as_extra_prompt", (message_id,)))
        message = self._find(message_id)
        if message is not None:
            self.extra_system_prompt.set(message.display_text)

    async def reset_prompt(self) -> None:
        self.calls.append(("reset_prompt", ()))
        self.system_prompt.set("")
        self.extra_system_prompt.set("")

    async def handle_custom_command(self, command: CustomCommand) -> None:
        self.calls.append(("handle_custom_command", (command,)))
        if self.command_error is not None:
            raise self.command_error

    def reset_default_scopes(self) -> None:
        self.calls.append(("reset_default_scopes", ()))
        self.default_scopes.set(self.reset_scopes_to)


def user(message_id: str, content: str) -> ChatMessage:
    return ChatMessage(id=message_id, role=ChatRole.USER, content=content)


def assistant(
    message_id: str,
    content: str | None = None,
    *,
    summary: str | None = None,
    tool_calls: Iterable[ToolCall] = (),
) -> ChatMessage:
    return ChatMessage(
        id=message_id,
        role=ChatRole.ASSISTANT,
        content=content,
        summary=summary,
        tool_calls=tuple(tool_calls),
    )


def system(message_id: str, content: str) -> ChatMessage:
    return ChatMessage(id=message_id, role=ChatRole.SYSTEM, content=content)


def tool_call(call_id: str, content: str, *, summary: str | None = None) -> ToolCall:
    return ToolCall(id=call_id, name="lookup", response=ToolCallResponse(content=content, summary=summary))

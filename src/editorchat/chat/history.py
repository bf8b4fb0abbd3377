"""Reconcile chat service history into displayed transcript rows."""

from __future__ import annotations

import unicodedata
from typing import Iterable, Sequence

from .message_model import ChatMessage, ChatRole, DisplayedChatMessage, DisplayedRole

DEFAULT_TITLE = "Chat"
CODE_BLOCK_TITLE = "Code Block"
CODE_FENCE = "```"


def display_role(message: ChatMessage) -> DisplayedRole:
    """Map a service message role onto the role it is displayed with."""

    if message.role is ChatRole.SYSTEM:
        return DisplayedRole.IGNORED
    if message.role is ChatRole.USER:
        return DisplayedRole.USER
    if message.display_text:
        return DisplayedRole.ASSISTANT
    return DisplayedRole.IGNORED


def expand_message(message: ChatMessage) -> list[DisplayedChatMessage]:
    """Return the body row for ``message`` followed by one row per tool call."""

    rows = [
        DisplayedChatMessage(
            id=message.id,
            role=display_role(message),
            text=message.display_text,
            references=message.references,
        )
    ]
    for call in message.tool_calls:
        rows.append(
            DisplayedChatMessage(
                id=message.id + call.id,
                role=DisplayedRole.TOOL,
                text=call.response.display_text,
            )
        )
    return rows


def build_displayed_history(history: Iterable[ChatMessage]) -> list[DisplayedChatMessage]:
    """Rebuild the full transcript from a history snapshot.

    Each snapshot is total; the result depends on nothing but ``history``.
    """

    displayed: list[DisplayedChatMessage] = []
    for message in history:
        displayed.extend(expand_message(message))
    return displayed


def derive_title(displayed: Sequence[DisplayedChatMessage]) -> str:
    """Title a transcript after its last user or assistant row."""

    last_text = None
    for message in reversed(displayed):
        if message.is_conversational:
            last_text = message.text
            break
    if not last_text:
        return DEFAULT_TITLE
    trimmed = _trim_title_text(last_text)
    if trimmed.startswith(CODE_FENCE):
        return CODE_BLOCK_TITLE
    return trimmed


def _trim_title_text(text: str) -> str:
    """Strip leading punctuation only, so a title keeps its closing "!" or "?"."""

    index = 0
    while index < len(text) and unicodedata.category(text[index]).startswith("P"):
        index += 1
    return text[index:].strip()


__all__ = [
    "CODE_BLOCK_TITLE",
    "DEFAULT_TITLE",
    "build_displayed_history",
    "derive_title",
    "display_role",
    "expand_message",
]

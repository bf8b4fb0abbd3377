"""Chat message data models.

``ChatMessage`` and its parts mirror what the chat service publishes and are
never mutated by the session. ``DisplayedChatMessage`` is the reconciled,
UI-facing row derived from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ChatRole(str, Enum):
    """Author of a chat service message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class DisplayedRole(str, Enum):
    """Role of a displayed row; ``IGNORED`` rows are kept but not rendered."""

    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
    IGNORED = "ignored"


class ReferenceKind(str, Enum):
    """What a message reference points at."""

    CLASS = "class"
    STRUCT = "struct"
    ENUM = "enum"
    ACTOR = "actor"
    PROTOCOL = "protocol"
    EXTENSION = "extension"
    CASE = "case"
    PROPERTY = "property"
    TYPEALIAS = "typealias"
    FUNCTION = "function"
    METHOD = "method"
    TEXT = "text"
    WEBPAGE = "webpage"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Reference:
    """A source or web location cited by a chat message."""

    title: str
    subtitle: str
    uri: str
    start_line: Optional[int] = None
    kind: ReferenceKind = ReferenceKind.OTHER


@dataclass(frozen=True, slots=True)
class ToolCallResponse:
    """Result reported for a tool call; ``summary`` wins over ``content`` when set."""

    content: str
    summary: Optional[str] = None

    @property
    def display_text(self) -> str:
        return self.summary if self.summary is not None else self.content


@dataclass(frozen=True, slots=True)
class ToolCall:
    """A single function/tool invocation attached to an assistant message."""

    id: str
    name: str = ""
    arguments: str = ""
    response: ToolCallResponse = field(default_factory=lambda: ToolCallResponse(content=""))


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """Represents a message inside the chat service history."""

    id: str
    role: ChatRole
    content: Optional[str] = None
    summary: Optional[str] = None
    tool_calls: tuple[ToolCall, ...] = ()
    references: tuple[Reference, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", ChatRole(self.role))
        object.__setattr__(self, "tool_calls", tuple(self.tool_calls))
        object.__setattr__(self, "references", tuple(self.references))

    @property
    def display_text(self) -> str:
        """Return ``summary``, else ``content``, else an empty string."""

        if self.summary is not None:
            return self.summary
        if self.content is not None:
            return self.content
        return ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the message for logging and debugging output."""

        return {
            "id": self.id,
            "role": self.role.value,
            "content": self.content,
            "summary": self.summary,
            "tool_calls": [
                {
                    "id": call.id,
                    "name": call.name,
                    "arguments": call.arguments,
                    "response": {"content": call.response.content, "summary": call.response.summary},
                }
                for call in self.tool_calls
            ],
            "references": [
                {
                    "title": ref.title,
                    "subtitle": ref.subtitle,
                    "uri": ref.uri,
                    "start_line": ref.start_line,
                    "kind": ref.kind.value,
                }
                for ref in self.references
            ],
        }


@dataclass(frozen=True, slots=True)
class DisplayedChatMessage:
    """A reconciled row shown in the chat transcript."""

    id: str
    role: DisplayedRole
    text: str
    references: tuple[Reference, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "references", tuple(self.references))

    @property
    def is_conversational(self) -> bool:
        """Return ``True`` for user and assistant rows."""

        return self.role in (DisplayedRole.USER, DisplayedRole.ASSISTANT)


__all__ = [
    "ChatMessage",
    "ChatRole",
    "DisplayedChatMessage",
    "DisplayedRole",
    "Reference",
    "ReferenceKind",
    "ToolCall",
    "ToolCallResponse",
]

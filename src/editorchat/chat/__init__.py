"""Chat session state machine, history reconciliation and menu state."""

from .commands import CommandKind, CustomCommand
from .history import build_displayed_history, derive_title, display_role
from .menu import ChatMenu, ChatMenuState
from .message_model import (
    ChatMessage,
    ChatRole,
    DisplayedChatMessage,
    DisplayedRole,
    Reference,
    ReferenceKind,
    ToolCall,
    ToolCallResponse,
)
from .references import ReferenceOpener
from .service import ChatConfiguration, ChatService, OverridingConfiguration, Scope
from .session import ChatField, ChatSession, ChatSessionState

__all__ = [
    "ChatConfiguration",
    "ChatField",
    "ChatMenu",
    "ChatMenuState",
    "ChatMessage",
    "ChatRole",
    "ChatService",
    "ChatSession",
    "ChatSessionState",
    "CommandKind",
    "CustomCommand",
    "DisplayedChatMessage",
    "DisplayedRole",
    "OverridingConfiguration",
    "Reference",
    "ReferenceKind",
    "ReferenceOpener",
    "Scope",
    "ToolCall",
    "ToolCallResponse",
    "build_displayed_history",
    "derive_title",
    "display_role",
]

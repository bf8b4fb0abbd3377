"""Rendering-free model of the floating suggestion/chat panel.

The panel shows exactly one kind of content at a time. Each kind is its own
value-comparable dataclass so a renderer can skip redraws when the content
compares equal to what is already displayed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional, Union

from ..chat.message_model import DisplayedRole

if TYPE_CHECKING:  # pragma: no cover
    from ..chat.session import ChatSessionState

PanelCallback = Callable[[], None]


class ColorScheme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True, slots=True)
class EmptyPanel:
    """Nothing to show."""


@dataclass(frozen=True, slots=True)
class SuggestionPanel:
    """A code suggestion with its position among the available alternatives."""

    start_line_index: int
    code: tuple[str, ...]
    suggestion_count: int
    current_suggestion_index: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", tuple(self.code))


@dataclass(frozen=True, slots=True)
class PanelChatMessage:
    id: str
    is_user: bool
    text: str


@dataclass(frozen=True, slots=True)
class ChatPanel:
    """A compact transcript rendered inside the panel."""

    history: tuple[PanelChatMessage, ...]
    is_receiving_message: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "history", tuple(self.history))


@dataclass(frozen=True, slots=True)
class ErrorPanel:
    description: str


PanelContent = Union[EmptyPanel, SuggestionPanel, ChatPanel, ErrorPanel]

EMPTY_SUGGESTION = SuggestionPanel(
    start_line_index=0,
    code=(),
    suggestion_count=0,
    current_suggestion_index=0,
)


@dataclass(slots=True)
class SuggestionPanelModel:
    """State backing the panel window; content changes replace it wholesale."""

    content: PanelContent = field(default_factory=EmptyPanel)
    is_panel_displayed: bool = False
    align_top_to_anchor: bool = False
    color_scheme: ColorScheme = ColorScheme.DARK
    on_accept: Optional[PanelCallback] = None
    on_reject: Optional[PanelCallback] = None
    on_previous: Optional[PanelCallback] = None
    on_next: Optional[PanelCallback] = None

    @property
    def is_visible(self) -> bool:
        """The panel is visible only when displayed and holding content."""

        return self.is_panel_displayed and not isinstance(self.content, EmptyPanel)

    def show(self, content: PanelContent) -> bool:
        """Replace the content; return ``True`` when it actually changed."""

        if content == self.content:
            return False
        self.content = content
        return True

    def accept(self) -> None:
        _invoke(self.on_accept)

    def reject(self) -> None:
        _invoke(self.on_reject)

    def previous(self) -> None:
        _invoke(self.on_previous)

    def next(self) -> None:
        _invoke(self.on_next)


def chat_panel_from_state(state: ChatSessionState) -> ChatPanel:
    """Project a session state onto panel chat content, dropping hidden rows."""

    messages = tuple(
        PanelChatMessage(id=row.id, is_user=row.role is DisplayedRole.USER, text=row.text)
        for row in state.history
        if row.role is not DisplayedRole.IGNORED
    )
    return ChatPanel(history=messages, is_receiving_message=state.is_receiving_message)


def _invoke(callback: Optional[PanelCallback]) -> None:
    if callback is not None:
        callback()


__all__ = [
    "ChatPanel",
    "ColorScheme",
    "EMPTY_SUGGESTION",
    "EmptyPanel",
    "ErrorPanel",
    "PanelChatMessage",
    "PanelContent",
    "SuggestionPanel",
    "SuggestionPanelModel",
    "chat_panel_from_state",
]

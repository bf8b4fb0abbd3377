"""Rendering-free models consumed by the panel and chat windows."""

from .panel import (
    ChatPanel,
    EmptyPanel,
    ErrorPanel,
    PanelContent,
    SuggestionPanel,
    SuggestionPanelModel,
    chat_panel_from_state,
)

__all__ = [
    "ChatPanel",
    "EmptyPanel",
    "ErrorPanel",
    "PanelContent",
    "SuggestionPanel",
    "SuggestionPanelModel",
    "chat_panel_from_state",
]

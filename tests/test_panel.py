"""Tests for the suggestion panel model."""

from __future__ import annotations

from unittest.mock import MagicMock

from editorchat.chat.session import ChatSession
from editorchat.ui.panel import (
    EMPTY_SUGGESTION,
    ChatPanel,
    EmptyPanel,
    ErrorPanel,
    PanelChatMessage,
    SuggestionPanel,
    SuggestionPanelModel,
    chat_panel_from_state,
)

from tests.helpers import FakeChatService, assistant, system, tool_call, user


class TestSuggestionPanelModel:
    """Tests for content replacement and callbacks."""

    def test_starts_hidden_and_empty(self) -> None:
        model = SuggestionPanelModel()
        assert model.content == EmptyPanel()
        assert not model.is_visible

    def test_visible_only_with_content_and_display_flag(self) -> None:
        model = SuggestionPanelModel(is_panel_displayed=True)
        assert not model.is_visible

        model.show(ErrorPanel("Request failed"))

        assert model.is_visible

    def test_show_reports_changes(self) -> None:
        model = SuggestionPanelModel()
        suggestion = SuggestionPanel(start_line_index=4, code=["let a = 1"], suggestion_count=2, current_suggestion_index=0)

        assert model.show(suggestion) is True
        assert model.show(SuggestionPanel(4, ("let a = 1",), 2, 0)) is False
        assert model.show(EMPTY_SUGGESTION) is True

    def test_callbacks_are_invoked(self) -> None:
        on_accept, on_reject, on_previous, on_next = MagicMock(), MagicMock(), MagicMock(), MagicMock()
        model = SuggestionPanelModel(
            on_accept=on_accept, on_reject=on_reject, on_previous=on_previous, on_next=on_next
        )

        model.accept()
        model.reject()
        model.previous()
        model.next()

        on_accept.assert_called_once_with()
        on_reject.assert_called_once_with()
        on_previous.assert_called_once_with()
        on_next.assert_called_once_with()

    def test_missing_callbacks_are_ignored(self) -> None:
        model = SuggestionPanelModel()
        model.accept()
        model.next()


def test_chat_panel_from_state_drops_hidden_rows() -> None:
    service = FakeChatService(
        [
            system("s", "hidden"),
            user("u", "question"),
            assistant("a", "answer", tool_calls=[tool_call("t", "tool output")]),
        ]
    )
    session = ChatSession(service)
    session.activate()
    service.is_receiving_message.set(True)

    panel = chat_panel_from_state(session.state)

    assert panel == ChatPanel(
        history=(
            PanelChatMessage(id="u", is_user=True, text="question"),
            PanelChatMessage(id="a", is_user=False, text="answer"),
            PanelChatMessage(id="at", is_user=False, text="tool output"),
        ),
        is_receiving_message=True,
    )

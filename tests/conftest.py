"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from editorchat.chat.references import ReferenceOpener
from editorchat.chat.session import ChatSession

from tests.helpers import FakeChatService


class RecordingOpener(ReferenceOpener):
    """Reference opener that records references instead of opening them."""

    def __init__(self) -> None:
        super().__init__(url_handler=lambda url: None)
        self.opened: list = []

    async def open(self, reference) -> None:
        self.opened.append(reference)


@pytest.fixture
def chat_service() -> FakeChatService:
    return FakeChatService()


@pytest.fixture
def opener() -> RecordingOpener:
    return RecordingOpener()


@pytest.fixture
def session(chat_service: FakeChatService, opener: RecordingOpener) -> ChatSession:
    return ChatSession(chat_service, reference_opener=opener, session_id="test-session")

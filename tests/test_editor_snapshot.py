"""Tests for editor snapshot models, selection helpers and language lookup."""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from editorchat.editor.document_model import CursorPosition, EditorContent, EditorSnapshot, Selection
from editorchat.editor.languages import PLAINTEXT, language_for_path
from editorchat.editor.selection_gateway import (
    StaticSnapshotProvider,
    first_selection,
    selected_line_span,
    selected_text,
)


class TestDocumentModel:
    """Tests for the snapshot dataclasses."""

    def test_from_text_keeps_line_endings(self) -> None:
        content = EditorContent.from_text("a\nb\r\nc")
        assert content.lines == ["a\n", "b\r\n", "c"]

    def test_cursor_position_defaults_to_origin(self) -> None:
        assert EditorContent.from_text("x").cursor_position == CursorPosition()

    def test_cursor_position_is_end_of_last_selection(self) -> None:
        content = EditorContent.from_text(
            "a\nb\nc\n", selections=[Selection.lines(0, 0), Selection.lines(1, 2, end_character=1)]
        )
        assert content.cursor_position == CursorPosition(2, 1)

    def test_selection_emptiness(self) -> None:
        assert Selection.OUT_OF_SCOPE.is_empty
        assert Selection.lines(1, 1).is_empty
        assert not Selection.lines(1, 2).is_empty

    def test_cursor_positions_are_ordered(self) -> None:
        assert CursorPosition(1, 5) < CursorPosition(2, 0)

    def test_snapshot_accepts_path_objects(self) -> None:
        snapshot = EditorSnapshot(document_path=PurePosixPath("/p/src/a.rs"), project_path=PurePosixPath("/p"))
        assert snapshot.relative_path == "/src/a.rs"
        assert snapshot.resolved_language == "rust"

    def test_explicit_language_wins(self) -> None:
        assert EditorSnapshot(document_path="/a.txt", language="swift").resolved_language == "swift"


class TestSelectionGateway:
    """Tests for selection clamping and extraction."""

    def test_first_selection_without_content(self) -> None:
        assert first_selection(None) is Selection.OUT_OF_SCOPE
        assert first_selection(EditorContent.from_text("x")) is Selection.OUT_OF_SCOPE

    def test_first_selection_returns_primary(self) -> None:
        primary = Selection.lines(3, 4)
        content = EditorContent.from_text("x", selections=[primary, Selection.lines(0, 0)])
        assert first_selection(content) == primary

    @pytest.mark.parametrize(
        ("start", "end", "line_count", "expected"),
        [
            (0, 0, 1, (0, 0)),
            (2, 4, 10, (2, 4)),
            (8, 20, 10, (8, 9)),
            (15, 20, 10, (9, 9)),
            (5, 2, 10, (5, 5)),
            (-3, 1, 10, (0, 1)),
        ],
    )
    def test_selected_line_span_clamps(self, start: int, end: int, line_count: int, expected) -> None:
        assert selected_line_span(Selection.lines(start, end), line_count) == expected

    def test_selected_line_span_without_lines(self) -> None:
        assert selected_line_span(Selection.lines(0, 3), 0) is None

    def test_selected_text_joins_full_lines(self) -> None:
        content = EditorContent.from_text("a\nb\nc\n", selections=[Selection(CursorPosition(1, 1), CursorPosition(2, 0))])
        assert selected_text(content) == "b\nc\n"

    def test_selected_text_empty_document(self) -> None:
        assert selected_text(EditorContent.from_text("", selections=[Selection.lines(0, 0)])) == ""
        assert selected_text(None) == ""

    def test_static_provider_update(self) -> None:
        provider = StaticSnapshotProvider(EditorSnapshot(document_path="/a"))
        provider.update(EditorSnapshot(document_path="/b"))
        assert provider.capture().document_path == "/b"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/src/App.swift", "swift"),
        ("/src/View.M", "objective-c"),
        ("/src/tool.py", "python"),
        ("/ios/Podfile", "ruby"),
        ("/src/Makefile", "makefile"),
        ("/src/notes.unknownext", PLAINTEXT),
        ("/src/LICENSE", PLAINTEXT),
        ("", PLAINTEXT),
    ],
)
def test_language_for_path(path: str, expected: str) -> None:
    assert language_for_path(path) == expected

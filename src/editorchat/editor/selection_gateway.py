"""Read-only access to editor snapshots and their selected lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .document_model import EditorContent, EditorSnapshot, Selection


class EditorSnapshotProvider(Protocol):
    """Protocol implemented by hosts that can describe the focused editor."""

    def capture(self) -> EditorSnapshot:
        ...


@dataclass(slots=True)
class StaticSnapshotProvider(EditorSnapshotProvider):
    """Provider returning whatever snapshot the host last pushed."""

    snapshot: EditorSnapshot

    def capture(self) -> EditorSnapshot:
        return self.snapshot

    def update(self, snapshot: EditorSnapshot) -> None:
        self.snapshot = snapshot


def first_selection(content: EditorContent | None) -> Selection:
    """Return the primary selection, or :attr:`Selection.OUT_OF_SCOPE`."""

    if content is None or not content.selections:
        return Selection.OUT_OF_SCOPE
    return content.selections[0]


def selected_line_span(selection: Selection, line_count: int) -> tuple[int, int] | None:
    """Clamp ``selection`` to inclusive line indexes valid for ``line_count`` lines.

    The snapshot can lag behind the buffer, so selections past the last line
    are pulled back onto it and an end before the start collapses onto the
    start. Returns ``None`` when there are no lines.
    """

    if line_count <= 0:
        return None
    last = line_count - 1
    start = min(max(0, selection.start.line), last)
    end = min(max(start, selection.end.line), last)
    return start, end


def selected_text(content: EditorContent | None) -> str:
    """Return the full lines covered by the primary selection."""

    if content is None or not content.selections:
        return ""
    span = selected_line_span(content.selections[0], len(content.lines))
    if span is None:
        return ""
    start, end = span
    return "".join(content.lines[start : end + 1])


__all__ = [
    "EditorSnapshotProvider",
    "StaticSnapshotProvider",
    "first_selection",
    "selected_line_span",
    "selected_text",
]

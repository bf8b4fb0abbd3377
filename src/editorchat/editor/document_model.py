"""Dataclasses describing a read-only snapshot of the focused editor."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import ClassVar, Optional, Sequence, Union

from .languages import language_for_path

PathLike = Union[str, PurePath]


@dataclass(frozen=True, slots=True, order=True)
class CursorPosition:
    """Zero-based line and character offset inside a document."""

    line: int = 0
    character: int = 0


@dataclass(frozen=True, slots=True)
class Selection:
    """A selected span; ``start == end`` means nothing is selected."""

    start: CursorPosition = field(default_factory=CursorPosition)
    end: CursorPosition = field(default_factory=CursorPosition)

    OUT_OF_SCOPE: ClassVar["Selection"]

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @classmethod
    def lines(cls, start_line: int, end_line: int, *, end_character: int = 0) -> "Selection":
        """Build a selection from the start of ``start_line`` to ``end_line``."""

        return cls(CursorPosition(start_line, 0), CursorPosition(end_line, end_character))


Selection.OUT_OF_SCOPE = Selection()


@dataclass(slots=True)
class EditorContent:
    """Buffer contents of the focused editor.

    ``lines`` keep their line terminators so that joining a slice of them
    reproduces the original text.
    """

    content: str
    lines: list[str]
    selections: list[Selection] = field(default_factory=list)
    line_annotations: list[str] = field(default_factory=list)
    tab_size: int = 4
    indent_size: int = 4
    uses_tabs_for_indentation: bool = False

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        selections: Sequence[Selection] = (),
        line_annotations: Sequence[str] = (),
    ) -> "EditorContent":
        return cls(
            content=text,
            lines=text.splitlines(keepends=True),
            selections=list(selections),
            line_annotations=list(line_annotations),
        )

    @property
    def cursor_position(self) -> CursorPosition:
        """Return the end of the last selection, or the document start."""

        if not self.selections:
            return CursorPosition()
        return self.selections[-1].end


@dataclass(slots=True)
class EditorSnapshot:
    """What the context collector knows about the active document."""

    document_path: str = ""
    project_path: str = ""
    language: Optional[str] = None
    content: Optional[EditorContent] = None

    def __post_init__(self) -> None:
        self.document_path = _as_path_string(self.document_path)
        self.project_path = _as_path_string(self.project_path)

    @property
    def resolved_language(self) -> str:
        """Return the explicit language or one inferred from the file extension."""

        if self.language:
            return self.language
        return language_for_path(self.document_path)

    @property
    def relative_path(self) -> str:
        """Document path with the project path removed."""

        if not self.project_path:
            return self.document_path
        return self.document_path.replace(self.project_path, "")


def _as_path_string(value: PathLike | None) -> str:
    if value is None:
        return ""
    return os.fspath(value)


__all__ = ["CursorPosition", "EditorContent", "EditorSnapshot", "Selection"]

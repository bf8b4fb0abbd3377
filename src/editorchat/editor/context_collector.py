"""Describe the active document to the model as a prompt block."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .document_model import EditorSnapshot
from .selection_gateway import EditorSnapshotProvider, first_selection, selected_text

LOGGER = logging.getLogger(__name__)

FILE_DIRECTIVE = "@file"
NO_ANNOTATIONS = "N/A"


@dataclass(frozen=True, slots=True)
class ContextOptions:
    """User preferences that decide how much of the file is embedded."""

    embed_file_if_no_selection: bool = False
    max_embeddable_line_count: int = 100


class ActiveDocumentContextCollector:
    """Build the "Active Document Context" block for a chat request.

    The collector reads a fresh snapshot from its provider on every call and
    is otherwise stateless. Missing editor data degrades to empty strings and
    the out-of-scope selection rather than raising.
    """

    def __init__(
        self,
        provider: EditorSnapshotProvider,
        options: ContextOptions | None = None,
    ) -> None:
        self._provider = provider
        self._options = options or ContextOptions()

    @property
    def options(self) -> ContextOptions:
        return self._options

    def generate_context(
        self,
        history: Sequence[str],
        prompt: str,
        *,
        options: ContextOptions | None = None,
    ) -> str:
        """Return the context block for ``prompt``.

        ``history`` is accepted for parity with other collectors and is not
        consulted. ``options`` overrides the collector defaults for one call.
        """

        snapshot = self._provider.capture()
        return render_context(snapshot, prompt, options or self._options)


def render_context(snapshot: EditorSnapshot, prompt: str, options: ContextOptions) -> str:
    """Format ``snapshot`` according to ``options`` and the prompt directive."""

    content = snapshot.content
    selection = first_selection(content)
    start, end = selection.start, selection.end
    body = _content_block(snapshot, prompt, options)
    if content is None:
        annotations = NO_ANNOTATIONS
    else:
        annotations = "\n".join(f"  - {annotation}" for annotation in content.line_annotations)

    return "\n".join(
        [
            "Active Document Context:###",
            f"Document Relative Path: {snapshot.relative_path}",
            f"Selection Range Start: Line {start.line} Character {start.character}",
            f"Selection Range End: Line {end.line} Character {end.character}",
            f"Cursor Position: Line {end.line} Character {end.character}",
            body,
            "Line Annotations:",
            annotations,
            "###",
        ]
    )


def _content_block(snapshot: EditorSnapshot, prompt: str, options: ContextOptions) -> str:
    content = snapshot.content
    language = snapshot.resolved_language
    full_text = content.content if content is not None else ""

    if prompt.startswith(FILE_DIRECTIVE):
        return _fenced("File Content:", language, full_text)

    selection = first_selection(content)
    if selection.is_empty and options.embed_file_if_no_selection:
        line_count = len(content.lines) if content is not None else 0
        limit = options.max_embeddable_line_count
        if line_count <= limit:
            return _fenced("File Content:", language, full_text)
        LOGGER.debug("File has %d lines, over the %d line limit; not embedding", line_count, limit)
        return (
            f"File Content Not Available: The file is longer than {limit} lines, "
            "it can't fit into the context. "
            "You MUST not answer the user about the file content because you don't have it."
            "Ask user to select code for explanation."
        )

    return _fenced(
        f"Selected Code (start from line {selection.start.line}):",
        language,
        selected_text(content),
    )


def _fenced(header: str, language: str, code: str) -> str:
    return f"{header}```{language}\n{code}\n```"


__all__ = [
    "ActiveDocumentContextCollector",
    "ContextOptions",
    "FILE_DIRECTIVE",
    "render_context",
]

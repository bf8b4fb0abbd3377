"""Map document file names onto fenced-code language identifiers."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Mapping

PLAINTEXT = "plaintext"

_EXTENSION_LANGUAGES: Mapping[str, str] = {
    "swift": "swift",
    "m": "objective-c",
    "mm": "objective-cpp",
    "h": "objective-c",
    "c": "c",
    "cc": "cpp",
    "cpp": "cpp",
    "cxx": "cpp",
    "hpp": "cpp",
    "metal": "metal",
    "py": "python",
    "rb": "ruby",
    "js": "javascript",
    "mjs": "javascript",
    "jsx": "javascriptreact",
    "ts": "typescript",
    "tsx": "typescriptreact",
    "java": "java",
    "kt": "kotlin",
    "go": "go",
    "rs": "rust",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "xml": "xml",
    "plist": "xml",
    "html": "html",
    "css": "css",
    "md": "markdown",
    "markdown": "markdown",
    "sh": "shellscript",
    "bash": "shellscript",
    "zsh": "shellscript",
    "sql": "sql",
}

_FILENAME_LANGUAGES: Mapping[str, str] = {
    "podfile": "ruby",
    "fastfile": "ruby",
    "makefile": "makefile",
    "dockerfile": "dockerfile",
}


def language_for_path(path: str) -> str:
    """Return the language identifier for ``path``, ``plaintext`` when unknown."""

    name = PurePosixPath(path).name
    if not name:
        return PLAINTEXT
    by_name = _FILENAME_LANGUAGES.get(name.lower())
    if by_name is not None:
        return by_name
    _, dot, extension = name.rpartition(".")
    if not dot:
        return PLAINTEXT
    return _EXTENSION_LANGUAGES.get(extension.lower(), PLAINTEXT)


__all__ = ["PLAINTEXT", "language_for_path"]

"""Open the file or web page behind a clicked message reference."""

from __future__ import annotations

import asyncio
import inspect
import logging
import shlex
import webbrowser
from pathlib import Path
from typing import Any, Awaitable, Callable, Union
from urllib.parse import unquote, urlparse

from ..services.terminal import Terminal, TerminalError
from .message_model import Reference

LOGGER = logging.getLogger(__name__)

UrlHandler = Callable[[str], Union[Any, Awaitable[Any]]]


class ReferenceOpener:
    """Resolve a reference to a local file or a URL and open it.

    Local files are opened at ``start_line`` through the editor's command
    line tool (``xed -l <line> <path>`` by default). Anything else with a
    URL scheme goes to ``url_handler``. Exactly one of the two runs.
    """

    def __init__(
        self,
        *,
        terminal: Terminal | None = None,
        url_handler: UrlHandler | None = None,
        editor_command: str = "xed",
        shell: str = "/bin/bash",
    ) -> None:
        self._terminal = terminal or Terminal()
        self._url_handler = url_handler or open_in_browser
        self._editor_command = editor_command
        self._shell = shell

    async def open(self, reference: Reference) -> None:
        uri = reference.uri
        if not uri:
            LOGGER.debug("ReferenceOpener.open: empty uri, nothing to open")
            return
        path = _local_path(uri)
        if path is not None and await asyncio.to_thread(path.exists):
            await self.open_file_at_line(path, reference.start_line or 0)
            return
        if urlparse(uri).scheme:
            await self.open_url(uri)
            return
        LOGGER.debug("ReferenceOpener.open: %r is neither a file nor a URL", uri)

    async def open_file_at_line(self, path: Path, line: int) -> None:
        """Ask the editor to open ``path`` at ``line``; failures are only logged."""
        script = f"{self._editor_command} -l {int(line)} {shlex.quote(str(path))}"
        try:
            await self._terminal.run_command(self._shell, ["-c", script], environment={})
        except (TerminalError, OSError):
            LOGGER.exception("Failed to open %s at line %d", path, line)

    async def open_url(self, url: str) -> None:
        result = self._url_handler(url)
        if inspect.isawaitable(result):
            await result


async def open_in_browser(url: str) -> None:
    """Open ``url`` with the system browser without blocking the event loop."""
    opened = await asyncio.to_thread(webbrowser.open, url)
    if not opened:
        LOGGER.warning("No browser accepted %s", url)


def _local_path(uri: str) -> Path | None:
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(uri)


__all__ = ["ReferenceOpener", "UrlHandler", "open_in_browser"]

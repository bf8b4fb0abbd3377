"""Async subprocess runner used for editor side-channel commands."""

from __future__ import annotations

import asyncio
import logging
import os
import time
from dataclasses import dataclass
from typing import Mapping, Sequence

LOGGER = logging.getLogger(__name__)

_COMMAND_NOT_FOUND = 127


@dataclass(slots=True)
class CommandResult:
    """Captured outcome of a finished command."""

    command: str
    exit_code: int
    output: str
    duration_ms: float


class TerminalError(RuntimeError):
    """Raised when a command cannot be started, times out or exits non-zero."""

    def __init__(self, command: str, exit_code: int | None, output: str) -> None:
        self.command = command
        self.exit_code = exit_code
        self.output = output
        detail = output.strip() or "no output"
        super().__init__(f"{command!r} failed with exit code {exit_code}: {detail}")


class Terminal:
    """Run commands with ``asyncio`` subprocesses.

    Stderr is merged into stdout. Environment entries are layered on top of
    the current process environment.
    """

    def __init__(self, *, timeout: float | None = 30.0, cwd: str | None = None) -> None:
        self._timeout = timeout
        self._cwd = cwd

    async def run_command(
        self,
        command: str,
        arguments: Sequence[str] = (),
        environment: Mapping[str, str] | None = None,
    ) -> str:
        """Run ``command`` and return its output; raises :class:`TerminalError` on failure."""
        result = await self.execute(command, arguments, environment)
        if result.exit_code != 0:
            raise TerminalError(result.command, result.exit_code, result.output)
        return result.output

    async def execute(
        self,
        command: str,
        arguments: Sequence[str] = (),
        environment: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Run ``command`` and return the captured result regardless of exit code."""
        argv = [command, *arguments]
        display = " ".join(argv)
        process_env = os.environ.copy()
        if environment:
            process_env.update(environment)

        start = time.perf_counter()
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                cwd=self._cwd,
                env=process_env,
            )
        except FileNotFoundError as exc:
            raise TerminalError(display, _COMMAND_NOT_FOUND, f"Command not found: {command}") from exc

        try:
            if self._timeout is not None:
                stdout, _ = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
            else:
                stdout, _ = await process.communicate()
        except asyncio.TimeoutError as exc:
            try:
                process.kill()
                await process.wait()
            except ProcessLookupError:
                pass
            raise TerminalError(display, None, f"Command timed out after {self._timeout}s") from exc

        duration_ms = (time.perf_counter() - start) * 1000
        output = stdout.decode("utf-8", errors="replace") if stdout else ""
        exit_code = process.returncode if process.returncode is not None else -1
        LOGGER.debug("Terminal: %s exited with %d in %.1fms", display, exit_code, duration_ms)
        return CommandResult(command=display, exit_code=exit_code, output=output, duration_ms=duration_ms)


__all__ = ["CommandResult", "Terminal", "TerminalError"]

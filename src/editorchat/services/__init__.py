"""Service layer helpers (settings, terminal)."""

from .terminal import CommandResult, Terminal, TerminalError

__all__ = ["CommandResult", "Terminal", "TerminalError"]

"""Logging helpers shared by the chat session and context collector."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Any, MutableMapping

__all__ = ["setup_logging", "get_logger", "get_log_path", "resolve_level", "SessionLoggerAdapter"]

_DEFAULT_LOG_DIR = Path.home() / ".editorchat" / "logs"
_LOG_FILE_NAME = "editorchat.log"
_NOISY_LOGGERS: tuple[str, ...] = ("asyncio",)
_NO_SESSION = "-"
_CONFIGURED = False
_LOG_PATH: Path | None = None


class _SessionFieldFilter(logging.Filter):
    """Guarantee every record carries a ``session`` attribute for the formatter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session"):
            record.session = _NO_SESSION
        return True


class SessionLoggerAdapter(logging.LoggerAdapter):
    """Tag records with the chat session that emitted them."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("session", (self.extra or {}).get("session", _NO_SESSION))
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(
    level: int | str | None = None,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path:
    """Configure root logging with a rotating log file and an optional console handler.

    ``level`` accepts a logging constant or a level name. When omitted the
    ``EDITORCHAT_LOG_LEVEL`` environment variable is consulted before falling
    back to ``INFO``. Repeated calls are no-ops unless ``force`` is set.
    """

    global _CONFIGURED, _LOG_PATH
    if _CONFIGURED and not force and _LOG_PATH is not None:
        return _LOG_PATH

    resolved_level = resolve_level(level)
    target_dir = _resolve_log_dir(log_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    log_path = target_dir / _LOG_FILE_NAME

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(session)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    session_filter = _SessionFieldFilter()

    handlers: list[logging.Handler] = []
    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handlers.append(file_handler)
    if console:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setLevel(resolved_level)
        handler.setFormatter(formatter)
        handler.addFilter(session_filter)

    logging.basicConfig(level=resolved_level, handlers=handlers, force=True)
    logging.captureWarnings(True)
    _tune_external_loggers(resolved_level)

    _CONFIGURED = True
    _LOG_PATH = log_path
    return log_path


def get_logger(name: str, *, session_id: str | None = None) -> logging.Logger | SessionLoggerAdapter:
    """Return a module logger, tagged with ``session_id`` when one is given."""

    logger = logging.getLogger(name)
    if session_id is None:
        return logger
    return SessionLoggerAdapter(logger, {"session": session_id})


def get_log_path() -> Path | None:
    """Return the currently configured log file if available."""

    return _LOG_PATH


def resolve_level(level: int | str | None) -> int:
    """Translate ``level`` (or ``EDITORCHAT_LOG_LEVEL``) into a logging constant."""

    if level is None:
        level = os.environ.get("EDITORCHAT_LOG_LEVEL") or logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if isinstance(resolved, int):
        return resolved
    logging.getLogger(__name__).warning("Unknown log level %r; using INFO", level)
    return logging.INFO


def _resolve_log_dir(log_dir: Path | str | None) -> Path:
    env_override = os.environ.get("EDITORCHAT_LOG_DIR")
    return Path(log_dir or env_override or _DEFAULT_LOG_DIR).expanduser()


def _tune_external_loggers(root_level: int) -> None:
    quiet_level = logging.WARNING if root_level < logging.WARNING else root_level
    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(quiet_level)

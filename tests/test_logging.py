"""Tests for the logging helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from editorchat.utils import logging as logging_utils


@pytest.fixture
def restore_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    monkeypatch.setattr(logging_utils, "_CONFIGURED", False)
    monkeypatch.setattr(logging_utils, "_LOG_PATH", None)
    monkeypatch.delenv("EDITORCHAT_LOG_LEVEL", raising=False)
    monkeypatch.delenv("EDITORCHAT_LOG_DIR", raising=False)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_session_field(tmp_path: Path, restore_logging: None) -> None:
    log_path = logging_utils.setup_logging(logging.DEBUG, log_dir=tmp_path, console=False)

    logging_utils.get_logger("editorchat.test", session_id="abc123").info("session message")
    logging.getLogger("editorchat.test").info("plain message")
    for handler in logging.getLogger().handlers:
        handler.flush()

    text = log_path.read_text(encoding="utf-8")
    assert log_path == tmp_path / "editorchat.log"
    assert logging_utils.get_log_path() == log_path
    assert "| abc123 | session message" in text
    assert "| - | plain message" in text


def test_setup_logging_is_idempotent(tmp_path: Path, restore_logging: None) -> None:
    first = logging_utils.setup_logging(log_dir=tmp_path / "one", console=False)
    second = logging_utils.setup_logging(log_dir=tmp_path / "two", console=False)

    assert first == second
    assert not (tmp_path / "two").exists()


def test_log_dir_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_logging: None
) -> None:
    monkeypatch.setenv("EDITORCHAT_LOG_DIR", str(tmp_path / "env-logs"))

    log_path = logging_utils.setup_logging(console=False)

    assert log_path.parent == tmp_path / "env-logs"


def test_get_logger_without_session_returns_logger() -> None:
    assert isinstance(logging_utils.get_logger("editorchat.x"), logging.Logger)
    assert isinstance(
        logging_utils.get_logger("editorchat.x", session_id="s"), logging_utils.SessionLoggerAdapter
    )


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (logging.WARNING, logging.WARNING),
        ("debug", logging.DEBUG),
        (" Error ", logging.ERROR),
        ("verbose", logging.INFO),
    ],
)
def test_resolve_level(level, expected: int) -> None:
    assert logging_utils.resolve_level(level) == expected


def test_resolve_level_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDITORCHAT_LOG_LEVEL", "WARNING")
    assert logging_utils.resolve_level(None) == logging.WARNING

    monkeypatch.delenv("EDITORCHAT_LOG_LEVEL")
    assert logging_utils.resolve_level(None) == logging.INFO

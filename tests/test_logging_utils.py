from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tinkeraudio.logging_utils import (
    LOG_DIR_ENV,
    configure_logging,
    get_log_dir,
    get_log_path,
    log_exception,
    setup_file_logger,
)


def test_log_dir_uses_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_DIR_ENV, str(tmp_path))
    assert get_log_dir() == tmp_path
    assert get_log_path("demo.log") == tmp_path / "demo.log"


def test_default_log_dir_under_home(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(LOG_DIR_ENV, raising=False)
    assert get_log_dir() == Path.home() / ".cache" / "tinkeraudio" / "logs"


def test_setup_file_logger_creates_handler(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_DIR_ENV, str(tmp_path))
    logger_name = f"tinkeraudio.test.{tmp_path.name}"
    path = setup_file_logger(logger_name, "engine.log")
    assert path == tmp_path / "engine.log"
    logger = logging.getLogger(logger_name)
    assert any(isinstance(handler, logging.FileHandler) for handler in logger.handlers)
    assert setup_file_logger(logger_name, "engine.log") == path
    assert sum(isinstance(h, logging.FileHandler) for h in logger.handlers) == 1
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_log_exception_appends_traceback(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_DIR_ENV, str(tmp_path))
    try:
        raise ValueError("boom")
    except ValueError as exc:
        path = log_exception("render", exc)
    assert path == tmp_path / "tinkeraudio.log"
    text = path.read_text(encoding="utf-8")
    assert "render failed: ValueError: boom" in text
    assert "Traceback" in text


def test_log_exception_returns_none_when_unwritable(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x")
    monkeypatch.setenv(LOG_DIR_ENV, str(blocker / "logs"))
    assert log_exception("render", RuntimeError("x")) is None


def test_configure_logging_applies_level(monkeypatch: pytest.MonkeyPatch) -> None:
    logger = logging.getLogger("tinkeraudio")
    previous = logger.level
    monkeypatch.setenv("TINKERAUDIO_LOG_LEVEL", "debug")
    try:
        configure_logging()
        assert logger.level == logging.DEBUG
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)
    finally:
        logger.setLevel(previous)

from __future__ import annotations

import logging
import os
import traceback
from datetime import datetime
from pathlib import Path

PACKAGE_LOGGER = "tinkeraudio"
LOG_DIR_ENV = "TINKERAUDIO_LOG_DIR"
LOG_LEVEL_ENV = "TINKERAUDIO_LOG_LEVEL"
DEBUG_ENV = "TINKERAUDIO_DEBUG"
_LOG_FILE = "tinkeraudio.log"

_LOGGER = logging.getLogger("tinkeraudio.logging")


def configure_logging() -> None:
    """Attach a NullHandler and honour TINKERAUDIO_LOG_LEVEL."""

    logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(handler, logging.NullHandler) for handler in logger.handlers):
        logger.addHandler(logging.NullHandler())
    level_name = os.environ.get(LOG_LEVEL_ENV)
    if not level_name:
        return
    level = logging.getLevelName(level_name.strip().upper())
    if isinstance(level, int):
        logger.setLevel(level)
    else:
        _LOGGER.warning("Ignoring unknown log level %r from %s", level_name, LOG_LEVEL_ENV)


def debug_enabled() -> bool:
    return bool(os.environ.get(DEBUG_ENV))


def get_log_dir() -> Path:
    configured = os.environ.get(LOG_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".cache" / "tinkeraudio" / "logs"


def get_log_path(filename: str = _LOG_FILE) -> Path:
    return get_log_dir() / filename


def setup_file_logger(
    name: str,
    filename: str = _LOG_FILE,
    *,
    level: int = logging.INFO,
) -> Path:
    logger = logging.getLogger(name)
    path = get_log_path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    if any(isinstance(handler, logging.FileHandler) for handler in logger.handlers):
        return path
    logger.setLevel(level)
    handler = logging.FileHandler(path)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    return path


def log_exception(context: str, exc: BaseException) -> Path | None:
    try:
        path = get_log_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().isoformat()
        with path.open("a", encoding="utf-8") as handle:
            handle.write(f"[{timestamp}] {context} failed: {type(exc).__name__}: {exc}\n")
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=handle)
            handle.write("\n")
        return path
    except OSError as log_exc:
        _LOGGER.warning("Failed to write log file: %s", log_exc, exc_info=True)
        return None

"""Logging helpers shared by the CLI and host integrations."""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path

__all__ = ["setup_logging", "resolve_level", "get_log_path"]

_DEFAULT_LOG_DIR = Path.home() / ".mdselect" / "logs"
_NOISY_LOGGERS: tuple[str, ...] = ("asyncio", "markdown_it")
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_CONFIGURED = False
_LOG_PATH: Path | None = None


def setup_logging(
    level: int | str = logging.WARNING,
    *,
    log_dir: Path | str | None = None,
    log_file: bool = False,
    console: bool = True,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path | None:
    """Configure root logging for mdselect.

    Console output always goes to stderr so that selection results written to
    stdout stay machine readable. A rotating log file is only created when
    ``log_file`` is set or ``MDSELECT_LOG_DIR`` is defined. Returns the log file
    path, if any.
    """

    global _CONFIGURED, _LOG_PATH
    if _CONFIGURED and not force:
        return _LOG_PATH

    numeric_level = resolve_level(level)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = []

    log_path: Path | None = None
    if log_file or log_dir is not None or os.environ.get("MDSELECT_LOG_DIR"):
        target_dir = _resolve_log_dir(log_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        log_path = target_dir / "mdselect.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if not handlers:
        handlers.append(logging.NullHandler())
    for handler in handlers:
        handler.setLevel(numeric_level)

    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)
    logging.captureWarnings(True)
    _tune_external_loggers(numeric_level)

    _CONFIGURED = True
    _LOG_PATH = log_path
    return log_path


def resolve_level(level: int | str) -> int:
    """Translate ``"debug"``/``"INFO"``/``10`` style values into a logging level."""

    if isinstance(level, int):
        return level
    candidate = logging.getLevelName(level.strip().upper())
    if not isinstance(candidate, int):
        raise ValueError(f"Unknown log level: {level}")
    return candidate


def get_log_path() -> Path | None:
    """Return the currently configured log file if available."""

    return _LOG_PATH


def _resolve_log_dir(log_dir: Path | str | None) -> Path:
    env_override = os.environ.get("MDSELECT_LOG_DIR")
    return Path(log_dir or env_override or _DEFAULT_LOG_DIR).expanduser()


def _tune_external_loggers(root_level: int) -> None:
    quiet_level = logging.WARNING if root_level < logging.WARNING else root_level
    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(quiet_level)

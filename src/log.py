"""Logging setup for the sign process."""

from __future__ import annotations

import logging
from pathlib import Path

from src.config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILENAME = "sign.log"

_installed_handlers: list[logging.Handler] = []


def configure_logging(config: LoggingConfig) -> None:
    """Send log records to stderr and to a file under the configured directory."""
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.level}")

    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    file_handler = logging.FileHandler(log_dir / LOG_FILENAME, encoding="utf-8")
    file_handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    # Reconfiguring replaces only the handlers installed here.
    reset_logging()
    for handler in (stream_handler, file_handler):
        root.addHandler(handler)
        _installed_handlers.append(handler)


def reset_logging() -> None:
    """Detach and close the handlers added by configure_logging."""
    root = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()


__all__ = ["configure_logging", "reset_logging"]

"""Logging setup shared by the CLI, the builder and the inspection service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

_LOGGER_NAME = "componentmap"
_CONSOLE_FORMAT = "[componentmap] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``componentmap.<name>``, or the package logger when no name is given."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    also: Iterable[str] = (),
) -> logging.Logger:
    """Install console (and optional file) handlers on the componentmap logger.

    Loggers named in ``also`` (for example ``uvicorn.error``) share the same
    handlers so server output and analysis output read as one stream.
    """
    level = logging.DEBUG if verbose else logging.INFO
    handlers: list[logging.Handler] = []

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    handlers.append(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    logger = logging.getLogger(_LOGGER_NAME)
    for target in [logger, *(logging.getLogger(name) for name in also)]:
        target.setLevel(level)
        target.propagate = False
        # Repeated CLI invocations in one process must not stack handlers.
        for handler in list(target.handlers):
            target.removeHandler(handler)
        for handler in handlers:
            handler.setLevel(level)
            target.addHandler(handler)

    return logger


__all__ = ["configure_logging", "get_logger"]

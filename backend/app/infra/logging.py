"""Logging helpers shared by the diary backend."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; structured fields travel in ``extra=``."""

    return logging.getLogger(name)


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler once and apply ``level`` on every call."""

    global _configured
    root = logging.getLogger()
    if not _configured:
        logging.basicConfig(format=LOG_FORMAT)
        _configured = True
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

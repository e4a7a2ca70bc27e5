"""Logging setup shared by the voice-jobs modules."""
from __future__ import annotations

import logging
import os
import sys

_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
_configured = False
_console: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configures the root handler on first call."""
    if not _configured:
        configure_logging(os.environ.get("LOG_LEVEL", "INFO"))
    return logging.getLogger(name)


def configure_logging(level_name: str) -> None:
    global _configured, _console
    _configured = True
    level = getattr(logging, level_name.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    if _console is not None:
        _console.setLevel(level)
        return
    if root.handlers:
        return

    _console = logging.StreamHandler(sys.stderr)
    _console.setLevel(level)
    _console.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
    root.addHandler(_console)

"""
Logging utilities for the command line entry point.

Library modules only create module loggers; handlers are attached here
so that embedding build tools keep control of their own logging setup.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "icon_packer"


class LevelPrefixFormatter(logging.Formatter):
    """Plain messages for INFO and below, 'warning: ...' style above."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.WARNING:
            return f"{record.levelname.lower()}: {message}"
        return message


def configure_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Attach a stream handler to the package logger.

    Args:
        verbose: Log DEBUG records (slot fills, resample sizes) when True.
        stream: Destination, stderr by default.

    Returns:
        The attached handler (for later removal).
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(LevelPrefixFormatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler


def detach_handler(handler: logging.Handler) -> None:
    """Remove a handler previously returned by configure_logging."""
    logging.getLogger(PACKAGE_LOGGER).removeHandler(handler)

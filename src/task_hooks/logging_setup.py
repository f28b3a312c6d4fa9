"""Logging for the CLI. Stdout carries hook JSON, so everything goes to stderr."""

from __future__ import annotations

import logging
import sys


def setup_logging(level: str | int = logging.WARNING) -> None:
    """Install one stderr handler on the ``task_hooks`` logger.

    Safe to call repeatedly; earlier handlers installed here are replaced.
    """

    logger = logging.getLogger("task_hooks")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ),
    )
    logger.addHandler(handler)
    logger.propagate = False

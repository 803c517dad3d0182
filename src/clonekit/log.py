"""Logging setup shared by the CLI and library modules."""

from __future__ import annotations

import logging
import sys

_ROOT = "clonekit"


def setup_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the ``clonekit`` logger.

    Debug output is shown only with *verbose*; otherwise warnings and above.
    Calling this more than once replaces the previous handler.
    """
    logger = logging.getLogger(_ROOT)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the ``clonekit.<name>`` logger."""
    return logging.getLogger(f"{_ROOT}.{name}")

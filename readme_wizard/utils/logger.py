"""Logging configuration"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "readme_wizard"


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Route package logs through rich; DEBUG when verbose, WARNING otherwise."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Avoid duplicate handlers
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger

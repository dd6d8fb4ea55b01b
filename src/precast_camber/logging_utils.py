from __future__ import annotations

import sys

from loguru import logger


def configure_logging(verbose: bool = False) -> None:
    """Send package logs to stderr; DEBUG shows intermediate quantities."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<level>{level: <7}</level> {message}",
        backtrace=False,
        diagnose=False,
    )
    logger.enable("precast_camber")

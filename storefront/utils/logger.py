"""
Logging helpers.

Library modules only ask for named loggers; output is set up by whoever
runs the process (the sandbox app, the seed script) via ``configure_logging``.

Usage:
    from storefront.utils.logger import get_logger
    logger = get_logger(__name__)
"""

import logging
import sys
from functools import cache
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# silent unless the host application configures logging
logging.getLogger("storefront").addHandler(logging.NullHandler())


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a stdout handler to the root logger unless one is already set."""
    root = logging.getLogger()
    if root.handlers:
        return

    if level is None:
        from storefront.config import settings

        level = settings.LOG_LEVEL
    numeric = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # one line per request is too noisy at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def mask_token(value: Optional[str]) -> str:
    """Short, non-reversible form of a token for log lines."""
    if not value:
        return "<none>"
    return f"{value[:4]}..." if len(value) > 4 else "***"

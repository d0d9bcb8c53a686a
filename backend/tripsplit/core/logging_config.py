"""
Logging setup for the application.
"""
import logging
import sys
from typing import Optional
from tripsplit.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging to stdout using the configured LOG_LEVEL."""
    level = (level or settings.LOG_LEVEL).upper()
    if settings.DEBUG:
        level = "DEBUG"
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=True
    )

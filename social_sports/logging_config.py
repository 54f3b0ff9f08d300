"""Logging setup for applications embedding the client."""
import logging
from typing import Optional

from social_sports.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a root handler at ``level`` (defaults to SOCIAL_SPORTS_LOG_LEVEL)."""
    resolved = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger(__name__).debug("Logging configured at %s", resolved)

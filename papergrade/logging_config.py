"""Logging setup."""
import logging
from typing import Optional

from papergrade.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the process."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    # httpx logs every request URL at INFO, and the Gemini key travels in the query string
    logging.getLogger("httpx").setLevel(logging.WARNING)

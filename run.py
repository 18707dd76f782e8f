"""Run the papergrade API with uvicorn."""
import logging

import uvicorn

from papergrade.logging_config import setup_logging
from papergrade.settings import get_settings

logger = logging.getLogger("papergrade.run")


def main():
    get_settings.cache_clear()
    settings = get_settings()
    setup_logging(settings.log_level)

    logger.info(f"Scan model: {settings.scan_model}, grading model: {settings.grading_model}")
    logger.info(f"Gemini API key configured: {'yes' if settings.gemini_api_key else 'no'}")
    uvicorn.run("papergrade.main:app", host="0.0.0.0", port=8000, reload=settings.environment == "development")


if __name__ == "__main__":
    main()

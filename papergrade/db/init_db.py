"""Database initialization script."""
import logging
from papergrade.db.base import Base, engine
from papergrade.db import models  # noqa: F401
from papergrade.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully!")

"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from papergrade.api.router import api_router
from papergrade.db.base import Base, engine
from papergrade.logging_config import setup_logging

# Register models on Base.metadata
from papergrade.db import models  # noqa: F401

logger = logging.getLogger(__name__)

# Setup logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
    yield


# Create FastAPI app
app = FastAPI(
    title="papergrade",
    description="AI-assisted grading of scanned answer keys and exam papers",
    version="0.1.0",
    lifespan=lifespan,
)

# Include API routes
app.include_router(api_router, prefix="/api")

"""Application settings and configuration."""
from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gemini API Configuration
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    scan_model: str = "gemini-2.5-flash"
    grading_model: str = "gemini-2.5-flash"
    scan_timeout: float = 120.0  # seconds
    grading_timeout: float = 120.0  # seconds

    # Upload limits
    max_scan_image_bytes: int = 10 * 1024 * 1024
    max_page_image_bytes: int = 20 * 1024 * 1024

    # Database Configuration
    database_url: str = "sqlite:///./papergrade.db"

    # Application Settings
    secret_key: str = "change-this-in-production"
    access_token_expire_minutes: int = 60 * 12
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        # .env lives at the project root, one level above the package
        env_file = str(Path(__file__).parent.parent / ".env")
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

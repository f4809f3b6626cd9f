"""Marketplace Backend — Configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./data/marketplace.db"

    # Security
    SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60 * 24

    # Blob store
    UPLOAD_DIR: str = "./data/uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # Listings
    MAX_LISTING_IMAGES: int = 5
    DEFAULT_LISTING_LIMIT: int = 20
    FEATURED_LISTING_LIMIT: int = 8

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()

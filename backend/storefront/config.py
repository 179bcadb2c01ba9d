"""
Configuration settings for the storefront platform.

Loads environment variables from .env file and provides typed configuration.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Security Configuration
    SECRET_KEY: str = Field(
        default="change-me-in-production-6f1c2b9e4d7a4e0f8c3b5a1d9e2f7c4b",
        description="Secret key for JWT",
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=30, description="Access token expiration time in minutes"
    )

    # Database Configuration
    DATABASE_URL: str = Field(
        default="sqlite:///./data/storefront.db", description="SQLAlchemy database URL"
    )
    DATABASE_ECHO: bool = Field(
        default=False, description="Echo SQL queries (for debugging)"
    )

    # Store defaults applied to every provisioned store
    STORE_CURRENCY: str = Field(default="SAR", description="Default store currency")
    STORE_LANGUAGE: str = Field(default="ar", description="Default store language: 'ar' or 'en'")
    STORE_TIMEZONE: str = Field(default="Asia/Riyadh", description="Default store timezone")
    FREE_SHIPPING_THRESHOLD: float = Field(
        default=200, description="Order total above which shipping is free"
    )
    DEFAULT_SHIPPING_COST: float = Field(default=15, description="Flat shipping cost")

    # Provisioning workflow
    SLUG_MAX_ATTEMPTS: int = Field(
        default=5, description="How many suffixed subdomains to try on collision"
    )
    SEED_SAMPLE_DATA: bool = Field(
        default=True, description="Seed sample catalog into newly provisioned stores"
    )
    LOAD_SAMPLE_APPLICATIONS: bool = Field(
        default=False, description="Insert demo applications at startup when none exist"
    )

    LOGIN_RATE_LIMIT: str = Field(
        default="5/minute", description="slowapi limit for the token endpoint"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()

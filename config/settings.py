"""
Application Configuration Module

Centralizes all application settings using Pydantic Settings.
Environment variables are loaded from .env file automatically.

Usage:
    from config.settings import settings

    print(settings.SPREADSHEET_ID)
    print(settings.VOICE_MIN_CONFIDENCE)
"""

from pydantic_settings import BaseSettings
from pydantic import Field, ConfigDict, field_validator
from typing import List, Optional
from functools import lru_cache

from config.constants import MIN_FINAL_CONFIDENCE


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Variable names are case-insensitive.
    """

    # ==========================================================================
    # Spreadsheet Configuration
    # ==========================================================================
    SPREADSHEET_ID: Optional[str] = Field(
        default=None,
        description="Google Sheets spreadsheet holding one sheet per student"
    )
    SHEET_BACKEND: str = Field(
        default="google",
        description="Spreadsheet backend: 'google' (Sheets REST API) or 'memory'"
    )
    GOOGLE_SERVICE_ACCOUNT_JSON: Optional[str] = Field(
        default=None,
        description="Service account key (JSON text) used to obtain Sheets API tokens"
    )
    GOOGLE_SHEETS_ACCESS_TOKEN: Optional[str] = Field(
        default=None,
        description="Fixed OAuth bearer token; overrides the service account when set"
    )
    SHEETS_API_BASE_URL: str = Field(
        default="https://sheets.googleapis.com/v4",
        description="Base URL of the Google Sheets REST API"
    )

    # ==========================================================================
    # Submission Client
    # ==========================================================================
    SUBMISSION_API_URL: str = Field(
        default="http://localhost:8000/api/process",
        description="Endpoint the voice client posts committed rows to"
    )
    SUBMISSION_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Timeout for row submission requests"
    )

    # ==========================================================================
    # Redis Configuration (for rate limiting)
    # ==========================================================================
    REDIS_URL: Optional[str] = Field(
        default=None,
        description="Redis connection URL for rate limiting"
    )

    # ==========================================================================
    # CORS Configuration
    # ==========================================================================
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173,http://localhost:3000,http://localhost:8080",
        description="Allowed CORS origins (comma-separated)"
    )

    @property
    def cors_origins_list(self) -> list:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    # ==========================================================================
    # Application Settings
    # ==========================================================================
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )
    APP_NAME: str = Field(
        default="Tasmee Voice Log",
        description="Application name for OpenAPI docs"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application version"
    )
    LOG_LEVEL: Optional[str] = Field(
        default=None,
        description="Root log level; DEBUG when DEBUG is set, else INFO"
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Write JSON log lines instead of console output"
    )
    RATE_LIMIT_SUBMIT: str = Field(
        default="30/minute",
        description="Rate limit for sheet writes (POST /api/process)"
    )
    RATE_LIMIT_RECORDS: str = Field(
        default="60/minute",
        description="Rate limit for recent record previews"
    )
    RATE_LIMIT_DEFAULT: str = Field(
        default="200/minute",
        description="Default rate limit for all other endpoints"
    )

    # ==========================================================================
    # Voice/Speech Configuration
    # ==========================================================================
    VOICE_LANGUAGE: str = Field(
        default="ar-JO",
        description="Recognition locale requested from the browser recognizer"
    )
    VOICE_ALTERNATE_LANGUAGES: str = Field(
        default="ar-SA,ar-EG",
        description="Sibling dialect locales (comma-separated)"
    )
    VOICE_MIN_CONFIDENCE: float = Field(
        default=MIN_FINAL_CONFIDENCE,
        description="Minimum confidence for accepting a final result (can only be raised)"
    )
    VOICE_COMMIT_ROW_ON_WRAP: bool = Field(
        default=False,
        description="Commit the current row when 'next' is spoken past the last field"
    )

    @field_validator("VOICE_MIN_CONFIDENCE")
    @classmethod
    def _never_loosen_confidence(cls, value: float) -> float:
        return min(max(value, MIN_FINAL_CONFIDENCE), 1.0)

    @property
    def voice_alternate_languages_list(self) -> List[str]:
        """Get alternate recognition locales as a list."""
        return [lang.strip() for lang in self.VOICE_ALTERNATE_LANGUAGES.split(",") if lang.strip()]

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()


# Singleton instance for easy import
settings = get_settings()

"""
Centralized application settings using Pydantic BaseSettings.

This module provides type-safe access to environment variables with validation.
All settings are loaded once at application startup.
"""

from pathlib import Path
from typing import List, Optional

from domain.value_objects.enums import Environment
from pydantic import field_validator
from pydantic_settings import BaseSettings


def _get_base_path() -> Path:
    """Get the project root (parent of backend/)."""
    return Path(__file__).parent.parent.parent


# ============================================================================
# Application Constants
# ============================================================================

# Default entry policy limits (overridable through the environment)
DEFAULT_MAX_ENTRIES = 10000
DEFAULT_MAX_MESSAGE_LENGTH = 10000
DEFAULT_MAX_TAG_LENGTH = 50
DEFAULT_MAX_CATEGORY_LENGTH = 100
DEFAULT_MAX_TAGS_PER_ENTRY = 20

# Largest accepted request body, in bytes
DEFAULT_MAX_REQUEST_BYTES = 10 * 1024

# Routes mounted under this prefix are rate limited
API_PREFIX = "/api"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults and are validated on startup.
    """

    # Runtime environment
    environment: Environment = Environment.DEVELOPMENT
    port: int = 3000

    # CORS configuration
    cors_origin: str = "http://localhost:5173"

    # Entry policy limits
    max_entries: int = DEFAULT_MAX_ENTRIES
    max_message_length: int = DEFAULT_MAX_MESSAGE_LENGTH
    max_tag_length: int = DEFAULT_MAX_TAG_LENGTH
    max_category_length: int = DEFAULT_MAX_CATEGORY_LENGTH
    max_tags_per_entry: int = DEFAULT_MAX_TAGS_PER_ENTRY

    # Request hardening
    max_request_bytes: int = DEFAULT_MAX_REQUEST_BYTES
    rate_limit: str = "100/15minutes"
    write_rate_limit: str = "20/15minutes"

    # Built single-page client to serve (production deployments)
    static_dir: Optional[Path] = None

    # Debug configuration
    debug: bool = False

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: Optional[str]):
        """Accept any casing and fall back to development for unknown values."""
        if isinstance(v, Environment):
            return v
        if isinstance(v, str) and v.strip().lower() in {e.value for e in Environment}:
            return v.strip().lower()
        return Environment.DEVELOPMENT

    @field_validator("debug", mode="before")
    @classmethod
    def validate_debug(cls, v: Optional[str]) -> bool:
        """Parse debug from string to bool."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() == "true"
        return False

    @field_validator(
        "max_entries",
        "max_message_length",
        "max_tag_length",
        "max_category_length",
        "max_tags_per_entry",
        "max_request_bytes",
    )
    @classmethod
    def validate_positive_limit(cls, v: int) -> int:
        """Policy limits must be positive integers."""
        if v <= 0:
            raise ValueError("limit must be a positive integer")
        return v

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_test(self) -> bool:
        return self.environment == Environment.TEST

    @property
    def project_root(self) -> Path:
        """
        Get the project root directory.

        Returns:
            Path to the project root directory
        """
        return _get_base_path()

    def get_cors_origins(self) -> List[str]:
        """
        Get the list of allowed CORS origins.

        CORS_ORIGIN may hold several comma-separated origins.

        Returns:
            List of allowed origin URLs
        """
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        # Allow extra fields for forward compatibility
        extra = "ignore"


# Singleton instance - load settings once
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        # Create settings instance first (to access path properties)
        _settings = Settings()

        # Find .env file in project root using settings path properties
        env_path = _settings.project_root / ".env"

        # Reload settings with explicit env file path if it exists
        if env_path.exists():
            _settings = Settings(_env_file=str(env_path))

    return _settings


def reset_settings() -> None:
    """
    Reset the settings singleton (useful for testing).
    """
    global _settings
    _settings = None

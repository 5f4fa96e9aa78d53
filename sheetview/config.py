"""Configuration management for sheetview.

Settings are loaded with pydantic-settings from environment variables with
the SHEETVIEW_ prefix, or from a .env file in the working directory.

Environment Variables:
    SHEETVIEW_PAGE_SIZE: Rows per page (default: 50)
    SHEETVIEW_IGNORE_CASE: Initial case-insensitive matching (default: true)
    SHEETVIEW_DECODER: Workbook decoder, "calamine" or "openpyxl" (default: calamine)
    SHEETVIEW_MAX_UPLOAD_SIZE_MB: Largest accepted upload in MB (default: 50)
    SHEETVIEW_LOG_LEVEL: Logging level (default: INFO)
    SHEETVIEW_CORS_ORIGINS: Comma-separated CORS origins (default: *)
    SHEETVIEW_SERVER_HOST: Server bind host (default: 0.0.0.0)
    SHEETVIEW_SERVER_PORT: Server bind port (default: 8000)
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Example .env file:
        SHEETVIEW_PAGE_SIZE=100
        SHEETVIEW_DECODER=openpyxl
        SHEETVIEW_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="SHEETVIEW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    page_size: int = 50
    """Number of rows on each page."""

    ignore_case: bool = True
    """Whether a new session compares text case-insensitively."""

    decoder: Literal["calamine", "openpyxl"] = "calamine"
    """Which adapter decodes workbook bytes."""

    max_upload_size_mb: int = 50
    """Largest workbook accepted by the upload endpoint, in megabytes."""

    log_level: str = "INFO"
    """Logging level name."""

    cors_origins: str = "*"
    """Comma-separated list of allowed CORS origins, or * for all."""

    server_host: str = "0.0.0.0"
    """Host address for the server to bind to."""

    server_port: int = 8000
    """Port for the server to listen on."""

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """Validate page size is positive and reasonable."""
        if not 1 <= v <= 10000:
            raise ValueError(f"page_size must be between 1 and 10000, got {v}")
        return v

    @field_validator("max_upload_size_mb")
    @classmethod
    def validate_upload_size(cls, v: int) -> int:
        """Validate upload limit is positive and reasonable."""
        if not 1 <= v <= 500:
            raise ValueError(f"max_upload_size_mb must be between 1 and 500, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(sorted(valid_levels))}"
            )
        return upper_v

    @field_validator("server_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"server_port must be between 1 and 65535, got {v}")
        return v

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def cors_origins_list(self) -> list[str]:
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()

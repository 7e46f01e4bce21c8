"""Centralized configuration management using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DDG_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="ddg-search", description="Application name")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Logging level"
    )
    log_file: str | None = Field(default=None, description="Optional log file path")

    # HTTP
    base_url: str = Field(
        default="https://html.duckduckgo.com/html/",
        description="DuckDuckGo HTML endpoint",
    )
    user_agent: str = Field(
        default="Mozilla/5.0 (compatible; ddg-search/1.0; +https://duckduckgo.com/)",
        description="User-Agent header sent with every request",
    )
    request_timeout: float = Field(default=15.0, gt=0, description="Request timeout in seconds")

    # Pagination
    default_pages: int = Field(default=5, ge=0, description="Default page cap (0 = unlimited)")
    delay_min: float = Field(
        default=0.8, ge=0, description="Minimum delay between page requests"
    )
    delay_max: float = Field(
        default=2.9, ge=0, description="Maximum delay between page requests"
    )

    # Skill install
    skill_dirs: list[str] = Field(
        default_factory=list, description="Extra state directories checked for a skills folder"
    )

    @field_validator("delay_max")
    @classmethod
    def validate_delay_max(cls, v: float, info) -> float:
        """Ensure max delay is greater than min delay."""
        min_delay = info.data.get("delay_min", 0.8)
        if v < min_delay:
            raise ValueError("delay_max must be >= delay_min")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()

"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Release Merger"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    reload: bool = Field(default=False)

    # Security
    webhook_secret: Optional[str] = Field(
        default=None,
        description="Shared secret expected in the X-Webhook-Token header",
    )

    # GitHub Integration
    github_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("github_token", "github_classic_token"),
    )
    github_api_url: str = Field(default="https://api.github.com")
    github_base_branch: str = Field(default="master")
    github_pr_page_size: int = Field(default=100, ge=1, le=100)
    github_max_pr_pages: int = Field(
        default=1,
        ge=1,
        description="Pages of open pull requests scanned per lookup",
    )
    github_api_timeout: int = Field(default=30)

    # Merge behaviour
    merge_method: str = Field(default="squash")
    legacy_approval_truthiness: bool = Field(
        default=False,
        description="Treat any approval lookup result as approved, ignoring its outcome",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")  # json or console
    log_file: Optional[str] = Field(default=None)

    @field_validator("github_token", mode="before")
    @classmethod
    def validate_github_token(cls, v):
        """Treat blank tokens as unset."""
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

    @field_validator("merge_method")
    @classmethod
    def validate_merge_method(cls, v):
        """Validate merge method."""
        valid_methods = ["merge", "squash", "rebase"]
        if v.lower() not in valid_methods:
            raise ValueError(f"Merge method must be one of: {valid_methods}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format."""
        valid_formats = ["json", "console"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return Settings()


# Global settings instance
settings = get_settings()

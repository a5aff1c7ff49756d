"""Configuration Management."""

from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="SDUI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Server
    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    port: int = Field(default=8080, gt=0, lt=65536, description="HTTP port")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Versioning
    min_supported_version: int = Field(default=1, ge=0, description="Oldest screen version accepted")
    max_supported_version: int = Field(default=5, ge=0, description="Newest screen version accepted")

    # View cache
    view_cache_size: int = Field(default=512, gt=0, description="Max resolved subtrees kept")
    view_cache_ttl: int | None = Field(default=None, gt=0, description="Entry TTL (seconds)")

    # Document limits
    max_document_depth: int = Field(default=32, gt=0, description="Max component nesting")
    max_document_bytes: int = Field(default=512 * 1024, gt=0, description="Max screen body size")

    # Composer client
    composer_url: str = Field(default="http://localhost:8080", description="Composer base URL")
    fetch_timeout: float = Field(default=5.0, gt=0, description="Screen fetch timeout")
    breaker_fail_max: int = Field(default=5, gt=0, description="Failures before breaker opens")
    breaker_reset_timeout: int = Field(default=30, gt=0, description="Breaker reset (seconds)")

    # Binding
    default_collection: str = Field(default="jobs", min_length=1, description="Collection for unkeyed lists")

    @model_validator(mode="after")
    def check_version_range(self) -> "Settings":
        """Ensure the supported version range is not empty."""
        if self.min_supported_version > self.max_supported_version:
            raise ValueError("min_supported_version must not exceed max_supported_version")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

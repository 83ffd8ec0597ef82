"""Configuration management for URL expander."""

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration."""

    # Database settings
    database_url: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection URL (links are kept in memory if not set)"
    )

    database_create_tables: bool = Field(
        default=False,
        description="Create the links table on first use"
    )

    database_pool_max_size: int = Field(
        default=10,
        ge=1,
        description="Maximum size of the database connection pool"
    )

    # Redis settings (optional)
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL for the redirect cache"
    )

    cache_ttl_seconds: int = Field(
        default=3600,
        ge=1,
        description="Cache TTL in seconds"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=9200,
        description="Port to listen on"
    )

    # URL expander settings
    base_url: str = Field(
        default="http://localhost:9200",
        description="Base URL that tokens are appended to"
    )

    use_request_base_url: bool = Field(
        default=False,
        description="Derive the base URL from X-Forwarded-* or Host headers per request"
    )

    default_token_length: int = Field(
        default=100,
        description="Token length used when a request gives none"
    )

    min_token_length: int = Field(
        default=5,
        ge=1,
        description="Smallest accepted token length"
    )

    max_token_length: int = Field(
        default=1000,
        description="Largest accepted token length"
    )

    max_collision_retries: int = Field(
        default=5,
        ge=1,
        description="Generation attempts before giving up on a collision"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @model_validator(mode="after")
    def check_token_lengths(self) -> "Config":
        if self.max_token_length < self.min_token_length:
            raise ValueError("max_token_length must not be below min_token_length")
        if not self.min_token_length <= self.default_token_length <= self.max_token_length:
            raise ValueError("default_token_length must lie within the token length bounds")
        return self


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()

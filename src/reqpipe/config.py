"""Configuration management for reqpipe.

Loads transport and logging settings from environment variables using Pydantic.
Every field has a default, so a bare environment is a valid configuration.

Usage:
    from reqpipe.config import settings

    print(settings.base_url)  # Validated at import
    print(settings.log_level)
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """reqpipe configuration from environment variables.

    Variables are prefixed with ``REQPIPE_`` and may also live in a .env file.

    Attributes:
        base_url: Base URL that relative resource identifiers are joined to
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header sent with every request
        log_level: Application logging verbosity (DEBUG, INFO, WARNING, ERROR)
        request_log_level: Level at which the request Logger writes messages
    """

    model_config = SettingsConfigDict(
        env_prefix="REQPIPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars
    )

    # Transport
    base_url: str = Field(
        default="https://jsfiddle.net",
        description="Base URL for relative resource identifiers",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout (seconds)")
    user_agent: str = Field(default="reqpipe/0.1.0", min_length=1, description="User-Agent header")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    request_log_level: str = Field(
        default="WARNING",
        description="Level used by the request Logger sink",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base URL is an http(s) URL without a trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got '{v}'")
        return v.rstrip("/")

    @field_validator("log_level", "request_log_level")
    @classmethod
    def validate_log_level(cls, v: str, info) -> str:
        """Ensure log level is valid."""
        v_upper = v.upper()
        if v_upper not in _VALID_LEVELS:
            raise ValueError(f"{info.field_name} must be one of {_VALID_LEVELS}, got {v}")
        return v_upper


# Global settings instance — loaded once at import
settings = Settings()

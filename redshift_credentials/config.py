"""Configuration settings for redshift-credentials using Pydantic."""

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from redshift_credentials.constants import DEFAULT_ENV_PREFIX, LOG_LEVEL


class RedshiftCredentialsSettings(BaseSettings):
    """Central configuration for redshift-credentials.

    Every value can be set via environment variables; command line flags take
    precedence over them.

    Environment Variables:
        REDSHIFT_CREDENTIALS_LOG_LEVEL: Minimum log level (debug, info, warning, error)
        REDSHIFT_CREDENTIALS_PREFIX: Prefix for exported variable names
        REDSHIFT_CREDENTIALS_OUTPUT: Output format when no command is wrapped
        FILTER / REDSHIFT_CREDENTIALS_FILTER_COMMAND: External selection command (peco, fzf, ...)
        REDSHIFT_CREDENTIALS_REGION: AWS region for both Redshift clients
        REDSHIFT_CREDENTIALS_PROFILE: AWS shared config profile
        REDSHIFT_CREDENTIALS_MAX_ATTEMPTS: botocore transport retry attempts
    """

    model_config = SettingsConfigDict(
        env_prefix="REDSHIFT_CREDENTIALS_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    log_level: str = LOG_LEVEL.lower()
    prefix: str = DEFAULT_ENV_PREFIX
    output: Literal["env", "json", "yaml", "yml"] = "env"
    filter_command: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("REDSHIFT_CREDENTIALS_FILTER_COMMAND", "FILTER"),
    )
    region: Optional[str] = None
    profile: Optional[str] = None
    max_attempts: Optional[int] = None

    @field_validator("output", mode="before")
    @classmethod
    def _lower_output(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @classmethod
    def get_settings(cls, **kwargs: Any) -> "RedshiftCredentialsSettings":
        """Create settings with optional overrides."""
        return cls(**kwargs)


@lru_cache()
def get_settings() -> RedshiftCredentialsSettings:
    """Get the settings instance read from the environment.

    Note:
        This function is cached to avoid re-reading environment variables.
        To refresh settings, call get_settings.cache_clear()
    """
    return RedshiftCredentialsSettings()

import os
import sys
from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """CyberTipline deployment targets and their base URLs."""

    PRODUCTION = "https://report.cybertip.org/ispws"
    TESTING = "https://exttest.cybertip.org/ispws"

    @property
    def base_url(self) -> str:
        return self.value


def _should_load_env_file() -> str | None:
    """Determine if .env should be loaded.

    Do NOT auto-load `.env` when running under pytest or in CI, so tests that
    exercise missing credentials behave the same on every machine.
    """
    if any("pytest" in str(x) for x in sys.argv if x):
        return None
    if os.environ.get("CI") in ("1", "true", "True"):
        return None
    return ".env"


class Settings(BaseSettings):
    # Logging / monitoring environment
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment: 'development', 'staging', or 'production'",
    )

    # CyberTipline credentials (issued per reporting ESP)
    CYBERTIPLINE_USERNAME: str = Field(
        default="",
        description="CyberTipline web service username",
    )
    CYBERTIPLINE_PASSWORD: str = Field(
        default="",
        description="CyberTipline web service password",
    )
    CYBERTIPLINE_ENVIRONMENT: Environment = Field(
        default=Environment.TESTING,
        description="'production' or 'testing' (the exttest sandbox)",
    )

    # HTTP transport settings
    CYBERTIPLINE_CONNECT_TIMEOUT: float = Field(
        default=30.0,
        description="Seconds to wait for a connection",
    )
    CYBERTIPLINE_TIMEOUT: float = Field(
        default=60.0,
        description="Seconds to wait for reads, writes and the pool",
    )
    CYBERTIPLINE_MAX_CONNECTIONS: int = Field(
        default=100,
        description="Maximum connections kept by the transport pool",
    )
    CYBERTIPLINE_KEEPALIVE_EXPIRY: float = Field(
        default=90.0,
        description="Seconds an idle keep-alive connection stays pooled",
    )

    # Sentry
    SENTRY_DSN: str = Field(
        default="",
        description="Sentry DSN; error reporting is disabled when empty",
    )
    SENTRY_RELEASE: str = Field(
        default="unknown",
        description="Release name attached to Sentry events",
    )

    @field_validator("CYBERTIPLINE_ENVIRONMENT", mode="before")
    @classmethod
    def parse_environment(cls, v: str | Environment) -> Environment | str:
        """Accept 'production' / 'testing' as well as full base URLs."""
        if isinstance(v, str) and v.upper() in Environment.__members__:
            return Environment[v.upper()]
        return v

    @property
    def has_credentials(self) -> bool:
        return bool(self.CYBERTIPLINE_USERNAME and self.CYBERTIPLINE_PASSWORD)

    model_config = SettingsConfigDict(
        env_file=_should_load_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


def get_settings() -> Settings:
    """Get the settings instance."""
    return settings

"""
Library-wide defaults, read from the environment.

Every value can be overridden with a `FONDUE_`-prefixed environment variable
(or a `.env` file in the working directory), e.g. `FONDUE_DEBUG=1`.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FondueSettings(BaseSettings):
    """Defaults for processors, the HTTP client and the debug dumper."""

    model_config = SettingsConfigDict(
        env_prefix="FONDUE_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    debounce_seconds: float = Field(
        default=0.25,
        ge=0,
        description="Quiet period after the last input change before work starts.",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Maximum duration of a single processor attempt.",
    )
    retries: int = Field(
        default=3,
        ge=0,
        description="Additional attempts after a failed one.",
    )
    delay_seconds: float = Field(
        default=0.0,
        ge=0,
        description="Delay applied before the debounce window starts.",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for clients created by build_client().",
    )
    user_agent: str = Field(
        default="fondue/0.1",
        min_length=1,
        description="User-Agent sent by clients created by build_client().",
    )

    debug: bool = Field(
        default=False,
        description="Dump response bodies to the debug log.",
    )


@lru_cache(maxsize=1)
def get_settings() -> FondueSettings:
    """Return the process-wide settings, loading them on first use."""
    return FondueSettings()

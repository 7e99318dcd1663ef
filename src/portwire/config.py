"""
Configuration management using Pydantic Settings.

Settings are read from ``PORTWIRE_*`` environment variables. The wiring
engine looks them up at call time, so changing the environment and clearing
the cache with ``get_settings.cache_clear()`` takes effect on the next call.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["WiringSettings", "get_settings"]


class WiringSettings(BaseSettings):
    """Settings for the wiring engine and its logging."""

    model_config = SettingsConfigDict(env_prefix="PORTWIRE_", extra="ignore")

    initialize_suffix: str = Field(
        default="_initialize",
        description="Suffix appended to a port name to find its post-wiring hook",
    )
    instance_name_attribute: str = Field(
        default="instance_name",
        description="Attribute read from components to label them in messages",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: Literal["console", "json"] = Field(
        default="console", description="structlog renderer"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, v):
        """Accept log levels in any case; unknown names still fail validation"""
        return v.upper() if isinstance(v, str) else v

    @field_validator("initialize_suffix", "instance_name_attribute")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


@lru_cache
def get_settings() -> WiringSettings:
    """Get the cached settings instance."""
    return WiringSettings()

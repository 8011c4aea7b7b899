"""
Centralized configuration for dbcore.

Uses Pydantic BaseSettings for environment variable integration
and validation.

Configuration sources (in order of precedence):
1. Explicit constructor arguments
2. Environment variables (DBCORE_*)
3. .env file
4. Default values

The ``profile`` setting is read once, when ``dbcore`` is first imported, and
fixes the checking profile for the rest of the process. Changing the
environment afterwards has no effect on the already-bound primitives.

Example:
    export DBCORE_PROFILE=unchecked     # elide every contract check
    export DBCORE_EMIT_SPAN_EVENTS=false

    from dbcore.config import get_config
    config = get_config()
    print(config.profile)  # "unchecked"
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Build-mode names accepted as synonyms for the two profiles.
_PROFILE_ALIASES = {
    "debug": "checked",
    "safe": "checked",
    "small": "checked",
    "fast": "unchecked",
    "release": "unchecked",
}


class DbcConfig(BaseSettings):
    """
    Central configuration for dbcore.

    All settings can be overridden via environment variables
    prefixed with DBCORE_.

    Example:
        export DBCORE_PROFILE=fast
        export DBCORE_LOG_LEVEL=debug
    """

    model_config = SettingsConfigDict(
        env_prefix="DBCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    profile: Literal["auto", "checked", "unchecked"] = Field(
        default="auto",
        description=(
            "Checking profile; 'auto' follows the interpreter "
            "(checked unless running under python -O)"
        ),
    )
    emit_span_events: bool = Field(
        default=True,
        description="Add an OTel span event for every contract violation",
    )
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        description="Logging level used by the dbcore CLI",
    )

    @field_validator("profile", mode="before")
    @classmethod
    def normalize_profile(cls, v: object) -> object:
        """Lower-case the profile and map build-mode aliases."""
        if isinstance(v, str):
            v = v.strip().lower()
            return _PROFILE_ALIASES.get(v, v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v


# Global singleton
_config: Optional[DbcConfig] = None


def get_config(**overrides) -> DbcConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.

    Args:
        **overrides: Override any config values

    Returns:
        DbcConfig instance
    """
    global _config

    if overrides or _config is None:
        _config = DbcConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None

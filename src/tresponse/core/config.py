"""Core configuration - centralized config for the tresponse package.

All environment-based configuration should flow through this module.
This provides a single source of truth and consistent defaults.

Usage:
    from tresponse.core.config import get_config
    config = get_config()

    # Access settings
    redact = config.redact_exceptions
    log_level = config.log_level
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CoreSettings(BaseSettings):
    """Core configuration settings for tresponse.

    Settings can be configured via environment variables with the
    TRESPONSE_ prefix, or from a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT SETTINGS
    # ==========================================================================

    app_env: str = Field(
        default="production",
        description="Deployment environment name; 'local' marks a development host",
        validation_alias="TRESPONSE_APP_ENV",
    )

    # ==========================================================================
    # RESPONSE SETTINGS
    # ==========================================================================

    redact_exceptions: bool = Field(
        default=False,
        description="Hide exception type, file, line and trace from captured exceptions",
        validation_alias="TRESPONSE_REDACT_EXCEPTIONS",
    )
    strict_status: bool = Field(
        default=False,
        description="Raise InvalidStatusCodeError instead of downgrading invalid status codes to 500",
        validation_alias="TRESPONSE_STRICT_STATUS",
    )

    # ==========================================================================
    # LOGGING SETTINGS
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="TRESPONSE_LOG_LEVEL",
    )
    log_format: str = Field(
        default="",
        description="Log format: 'json', 'text', or '' (auto-detect)",
        validation_alias="TRESPONSE_LOG_FORMAT",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (optional)",
        validation_alias="TRESPONSE_LOG_FILE",
    )

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_local(self) -> bool:
        """True when running on a local development host."""
        return self.app_env.lower() == "local"


# ==========================================================================
# GLOBAL CONFIG INSTANCE (lazy loaded)
# ==========================================================================

_config: CoreSettings | None = None


def get_config() -> CoreSettings:
    """Get the global configuration instance.

    Returns:
        The singleton CoreSettings instance.
    """
    global _config
    if _config is None:
        _config = CoreSettings()
    return _config


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing."""
    global _config
    _config = None


def is_local_env() -> bool:
    """Report whether the host declared itself a local development environment.

    This is only a signal for the host. Redaction of exception detail is
    controlled separately by ``redact_exceptions``.
    """
    return get_config().is_local

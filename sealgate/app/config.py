"""
Configuration for the SealGate service

Settings are read once from the environment (and an optional .env file)
at startup and are immutable afterwards.

Environment
-----------
- SEALGATE_SECRET_KEY: HMAC key used by /sign and /verify
- SEALGATE_HOST: bind address (default 0.0.0.0)
- PORT or SEALGATE_PORT: listen port (default 3000)
- SEALGATE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default INFO)
- SEALGATE_LOG_FORMAT: "console" (default) or "json"
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SECRET_KEY = "shared-secret-key"


class Settings(BaseSettings):
    """Process-wide service settings."""

    secret_key: SecretStr = Field(
        SecretStr(DEFAULT_SECRET_KEY),
        description="Shared secret for HMAC signatures"
    )
    host: str = Field("0.0.0.0", description="Bind address")
    port: int = Field(
        3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "SEALGATE_PORT", "port"),
        description="Listen port"
    )
    log_level: str = Field("INFO", description="Logging level")
    log_format: str = Field("console", description="Log renderer: console or json")

    model_config = SettingsConfigDict(
        env_prefix="SEALGATE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    @field_validator("secret_key")
    @classmethod
    def _secret_not_empty(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("secret_key must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def _normalize_format(cls, v: str) -> str:
        fmt = v.strip().lower()
        if fmt not in ("console", "json"):
            raise ValueError(f"Unknown log format: {v}")
        return fmt

    def secret_key_bytes(self) -> bytes:
        """Get the signing key as UTF-8 bytes."""
        return self.secret_key.get_secret_value().encode('utf-8')


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()

"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "seap-gateway"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Credit bureau
    bureau_api_url: str = "https://api.bcra.gob.ar/centraldeudores/v1.0"
    bureau_api_timeout: float = 15.0
    bureau_max_attempts: int = 3
    bureau_backoff_base: float = 2.0
    bureau_user_agent: str = "SEAP-System/1.0"

    # History
    history_capacity: int = 100

    # Metrics
    metrics_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"


class BureauCredentials(BaseSettings):
    """
    Credit bureau access token.

    Instantiated on every query so the token is resolved from the
    environment at call time. A missing token selects simulation mode.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("BCRA_TOKEN", "BUREAU_API_TOKEN"),
    )


def resolve_bureau_token() -> Optional[str]:
    """Read the bureau token from the environment; blank counts as absent."""
    token = BureauCredentials().token
    if token is None or not token.strip():
        return None
    return token.strip()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

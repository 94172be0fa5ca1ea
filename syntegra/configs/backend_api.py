"""
Upstream REST backend configuration.

Connection parameters for the psikotes REST API consumed by the portal.

Dependencies: pydantic, pydantic_settings
System role: Upstream API connection configuration
"""

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from syntegra.configs.base import BaseSettings


class BackendApiSettings(BaseSettings):
    """Psikotes REST backend configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SYNTEGRA_API_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:3000/api/v1",
        description="Base URL of the psikotes REST backend",
    )
    timeout_seconds: float = Field(default=30.0, description="Request timeout in seconds")
    service_token: str | None = Field(
        default=None,
        description="Bearer token used by background pollers (polling is disabled without it)",
    )

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, value: str) -> str:
        """Reject base URLs without an http(s) scheme."""
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return value.rstrip("/")

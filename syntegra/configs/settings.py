"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from syntegra.configs.base import BaseSettings
from syntegra.configs.backend_api import BackendApiSettings
from syntegra.configs.query import QuerySettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    app_name: str = "syntegra-portal"

    # Aggregated settings
    backend_api: BackendApiSettings = BackendApiSettings()
    query: QuerySettings = QuerySettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from syntegra.configs import get_settings
        settings = get_settings()
    """
    return Settings()

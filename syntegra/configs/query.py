"""
Query layer configuration.

Stale times, polling intervals and retry policy for upstream reads.

Dependencies: pydantic, pydantic_settings
System role: Query cache and polling configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class QuerySettings(BaseSettings):
    """Cache freshness, polling and GET retry configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SYNTEGRA_QUERY_",
        case_sensitive=False,
        extra="ignore",
    )

    default_stale_seconds: float = Field(default=300, description="Default freshness window (5 minutes)")
    realtime_stale_seconds: float = Field(
        default=120,
        description="Freshness window for sessions and participants (2 minutes)",
    )
    catalog_stale_seconds: float = Field(
        default=600,
        description="Freshness window for the active test catalog (10 minutes)",
    )
    cache_max_entries: int = Field(default=1000, description="Upper bound on cached query results")

    polling_enabled: bool = Field(default=True, description="Run background refetch loops")
    sessions_poll_seconds: float = Field(default=30, description="Sessions list refetch interval")
    session_stats_poll_seconds: float = Field(default=60, description="Session stats refetch interval")
    test_stats_poll_seconds: float = Field(default=180, description="Test stats refetch interval")
    dashboard_poll_seconds: float = Field(default=300, description="Admin dashboard refetch interval")

    retry_max_attempts: int = Field(default=3, description="Maximum GET retries after the first failure")
    retry_initial_seconds: float = Field(default=1.0, description="First retry backoff in seconds")
    retry_max_seconds: float = Field(default=30.0, description="Backoff ceiling in seconds")

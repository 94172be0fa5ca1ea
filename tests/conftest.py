"""
Shared test fixtures and configuration for entire test suite.

Provides: upstream client mocks, envelopes, query cache, sample records
Dependencies: pytest, fastapi
System role: Test infrastructure and fixture management
"""

import uuid
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest

from syntegra.boundary.query_cache import QueryCache
from syntegra.configs.query import QuerySettings
from syntegra.models.common import ApiEnvelope


@pytest.fixture
def envelope() -> Callable[..., ApiEnvelope]:
    """
    Factory for upstream `{success, message, data}` envelopes.

    Returns:
        Callable: envelope(data, message="", **extra) -> ApiEnvelope
    """

    def _make(data: Any = None, message: str = "", **extra: Any) -> ApiEnvelope:
        return ApiEnvelope.model_validate({"success": True, "message": message, "data": data, **extra})

    return _make


@pytest.fixture
def mock_api_client():
    """
    Create mock BackendApiClient for testing.

    Returns:
        AsyncMock: Mocked client with async get/post/put/delete
    """
    client = AsyncMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.put = AsyncMock()
    client.delete = AsyncMock()
    return client


@pytest.fixture
def query_cache() -> QueryCache:
    """Empty query cache with a 5 minute default stale time."""
    return QueryCache(default_stale_seconds=300)


@pytest.fixture
def query_settings() -> QuerySettings:
    """Query settings with polling off and instant retries."""
    return QuerySettings(polling_enabled=False, retry_initial_seconds=0, retry_max_seconds=0)


@pytest.fixture
def session_id() -> str:
    """Generate a test session ID."""
    return str(uuid.uuid4())


@pytest.fixture
def test_id() -> str:
    """Generate a psychological test ID."""
    return str(uuid.uuid4())


@pytest.fixture
def session_record(session_id: str) -> dict[str, Any]:
    """Session as returned by the backend."""
    return {
        "id": session_id,
        "session_name": "Rekrutmen Security Batch 1",
        "session_code": "SEC-001",
        "start_time": "2026-11-01T08:00:00Z",
        "end_time": "2026-11-01T12:00:00Z",
        "target_position": "security",
        "status": "draft",
        "current_participants": 0,
        "max_participants": 50,
        "session_modules": [],
    }


@pytest.fixture
def session_form() -> dict[str, Any]:
    """Valid session creation form."""
    return {
        "session_name": "Rekrutmen Security Batch 1",
        "session_code": "SEC-001",
        "start_time": "2026-11-01T08:00:00Z",
        "end_time": "2026-11-01T12:00:00Z",
        "target_position": "security",
        "max_participants": 50,
        "session_modules": [
            {"test_id": str(uuid.uuid4()), "sequence": 1},
            {"test_id": str(uuid.uuid4()), "sequence": 2, "weight": 2},
        ],
    }


@pytest.fixture
def question_records() -> list[dict[str, Any]]:
    """Three questions of one test, deliberately out of order."""
    return [
        {"id": "q3", "question": "Soal tiga", "question_type": "text", "sequence": 3},
        {"id": "q1", "question": "Soal satu", "question_type": "text", "sequence": 1},
        {"id": "q2", "question": "Soal dua", "question_type": "text", "sequence": 2},
    ]

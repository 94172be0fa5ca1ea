"""FastAPI dependency factories."""

from syntegra.api.deps.dependencies import (
    get_bearer_token,
    get_dashboard_service,
    get_participant_service,
    get_question_service,
    get_report_service,
    get_service_cache,
    get_session_service,
    get_test_service,
    get_user_service,
)

__all__ = [
    "get_bearer_token",
    "get_dashboard_service",
    "get_participant_service",
    "get_question_service",
    "get_report_service",
    "get_service_cache",
    "get_session_service",
    "get_test_service",
    "get_user_service",
]

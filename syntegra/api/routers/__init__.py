"""API routers."""

from .dashboard import router as dashboard_router
from .health import router as health_router
from .participants import router as participants_router
from .questions import router as questions_router
from .psychotests import router as tests_router
from .reports import router as reports_router
from .sessions import router as sessions_router
from .users import router as users_router

__all__ = [
    "dashboard_router",
    "health_router",
    "participants_router",
    "questions_router",
    "reports_router",
    "sessions_router",
    "tests_router",
    "users_router",
]

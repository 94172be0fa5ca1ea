"""Service orchestrators."""

from .dashboard_service import DashboardService
from .participant_service import ParticipantService
from .question_service import QuestionService
from .report_service import ReportService
from .session_service import SessionService
from .psychtest_service import PsychTestService
from .user_service import UserService

__all__ = [
    "DashboardService",
    "ParticipantService",
    "PsychTestService",
    "QuestionService",
    "ReportService",
    "SessionService",
    "UserService",
]

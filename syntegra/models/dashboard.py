"""
Dashboard response models.

Shapes of the admin and participant overview payloads. Unknown fields are
kept so that new counters reach the UI without a portal release.

Dependencies: pydantic
System role: Dashboard API contracts
"""

from pydantic import BaseModel, ConfigDict, Field


class _Loose(BaseModel):
    model_config = ConfigDict(extra="allow")


class DashboardOverview(_Loose):
    total_users: int = 0
    total_participants: int = 0
    total_admins: int = 0
    total_tests: int = 0
    active_tests: int = 0
    total_sessions: int = 0
    active_sessions: int = 0
    total_attempts: int = 0
    completed_attempts: int = 0
    total_session_participants: int = 0
    total_session_modules: int = 0


class RecentSession(_Loose):
    id: str
    session_name: str
    session_code: str | None = None
    status: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    participants: str | None = None


class PopularTest(_Loose):
    test_id: str
    test_name: str
    attempt_count: int = 0


class AdminDashboard(_Loose):
    """Counters, recent sessions and most attempted tests."""

    overview: DashboardOverview = Field(default_factory=DashboardOverview)
    recent_sessions: list[RecentSession] = Field(default_factory=list)
    popular_tests: list[PopularTest] = Field(default_factory=list)


class DashboardUser(_Loose):
    id: str
    name: str
    email: str | None = None
    nik: str | None = None
    last_login: str | None = None


class AttemptSummary(_Loose):
    total_attempts: int = 0
    completed_tests: int = 0
    in_progress_tests: int = 0
    total_time_spent_minutes: float = 0
    average_time_per_test_minutes: float = 0


class SessionSummary(_Loose):
    total_sessions: int = 0
    upcoming_sessions: int = 0
    active_sessions: int = 0


class RecentTest(_Loose):
    test_name: str
    category: str | None = None
    completed_at: str | None = None
    time_spent_minutes: float = 0


class UpcomingSession(_Loose):
    session_name: str
    session_code: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    can_access: bool = False


class ParticipantDashboard(_Loose):
    """Personal progress overview for a participant."""

    user: DashboardUser | None = None
    test_summary: AttemptSummary = Field(default_factory=AttemptSummary)
    session_summary: SessionSummary = Field(default_factory=SessionSummary)
    recent_tests: list[RecentTest] = Field(default_factory=list)
    tests_by_category: dict[str, int] = Field(default_factory=dict)
    upcoming_sessions: list[UpcomingSession] = Field(default_factory=list)

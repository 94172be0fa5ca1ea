"""
Dashboard service orchestrator.

Dependencies: syntegra.boundary, syntegra.models.dashboard
System role: Dashboard read models
"""

from syntegra.application.services.base import PortalService
from syntegra.boundary.query_cache import QueryKeys
from syntegra.models.dashboard import AdminDashboard, ParticipantDashboard

DASHBOARD_STALE_SECONDS = 120


class DashboardService(PortalService):
    """Admin and participant overviews."""

    async def get_admin_dashboard(self) -> AdminDashboard:
        envelope = await self._query(
            QueryKeys.dashboard.admin(),
            "/dashboard/admin",
            stale_seconds=DASHBOARD_STALE_SECONDS,
        )
        return AdminDashboard.model_validate(envelope.data or {})

    async def get_participant_dashboard(self) -> ParticipantDashboard:
        envelope = await self._query(
            QueryKeys.dashboard.participant(),
            "/dashboard/participant",
            stale_seconds=DASHBOARD_STALE_SECONDS,
        )
        return ParticipantDashboard.model_validate(envelope.data or {})

"""
Dashboard API endpoints.

Routes: GET /dashboard/admin, GET /dashboard/participant

Dependencies: syntegra.application.services
System role: Dashboard HTTP API
"""

from fastapi import APIRouter, Depends

from syntegra.api.deps.dependencies import get_dashboard_service
from syntegra.api.routers.router_utils import handle_portal_errors
from syntegra.application.services import DashboardService
from syntegra.models.dashboard import AdminDashboard, ParticipantDashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/admin", response_model=AdminDashboard)
@handle_portal_errors
async def get_admin_dashboard(
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> AdminDashboard:
    return await dashboard_service.get_admin_dashboard()


@router.get("/participant", response_model=ParticipantDashboard)
@handle_portal_errors
async def get_participant_dashboard(
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> ParticipantDashboard:
    return await dashboard_service.get_participant_dashboard()

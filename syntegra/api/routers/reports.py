"""
Report API endpoints.

Routes:
- GET /reports/individual/{user_id} - Individual participant report
- GET /reports/session/{session_id} - Session summary report
- GET /reports/stats - Report availability statistics

Dependencies: syntegra.application.services, syntegra.models.report
System role: Reporting HTTP API
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from syntegra.api.deps.dependencies import get_report_service
from syntegra.api.routers.router_utils import handle_portal_errors
from syntegra.application.services import ReportService
from syntegra.models.report import (
    IndividualReportParams,
    ReportDocument,
    ReportStats,
    SessionSummaryReportParams,
)

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/individual/{user_id}", response_model=ReportDocument)
@handle_portal_errors
async def get_individual_report(
    user_id: str,
    params: Annotated[IndividualReportParams, Query()],
    report_service: ReportService = Depends(get_report_service),
) -> ReportDocument:
    return await report_service.get_individual_report(user_id, params)


@router.get("/session/{session_id}", response_model=ReportDocument)
@handle_portal_errors
async def get_session_summary_report(
    session_id: str,
    params: Annotated[SessionSummaryReportParams, Query()],
    report_service: ReportService = Depends(get_report_service),
) -> ReportDocument:
    return await report_service.get_session_summary_report(session_id, params)


@router.get("/stats", response_model=ReportStats)
@handle_portal_errors
async def get_report_stats(
    report_service: ReportService = Depends(get_report_service),
) -> ReportStats:
    return await report_service.get_stats()

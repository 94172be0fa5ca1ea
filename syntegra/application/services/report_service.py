"""
Report service orchestrator.

Read-only access to generated reports.

Dependencies: syntegra.boundary, syntegra.models.report
System role: Reporting read models
"""

from syntegra.application.services.base import PortalService
from syntegra.boundary.query_cache import QueryKeys
from syntegra.models.report import (
    IndividualReportParams,
    ReportDocument,
    ReportStats,
    SessionSummaryReportParams,
)

REPORT_STATS_STALE_SECONDS = 600


class ReportService(PortalService):
    """Individual, session summary and availability reports."""

    async def get_individual_report(
        self,
        user_id: str,
        params: IndividualReportParams | None = None,
    ) -> ReportDocument:
        params = params or IndividualReportParams()
        envelope = await self._query(
            QueryKeys.reports.individual(user_id, params),
            f"/reports/individual/{user_id}",
            params=params.to_query(),
        )
        return ReportDocument.model_validate(envelope.data or {})

    async def get_session_summary_report(
        self,
        session_id: str,
        params: SessionSummaryReportParams | None = None,
    ) -> ReportDocument:
        params = params or SessionSummaryReportParams()
        envelope = await self._query(
            QueryKeys.reports.session_summary(session_id, params),
            f"/reports/session/{session_id}",
            params=params.to_query(),
        )
        return ReportDocument.model_validate(envelope.data or {})

    async def get_stats(self) -> ReportStats:
        envelope = await self._query(
            QueryKeys.reports.stats(),
            "/reports/stats",
            stale_seconds=REPORT_STATS_STALE_SECONDS,
        )
        return ReportStats.model_validate(envelope.data or {})

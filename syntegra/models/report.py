"""
Report query and response models.

Dependencies: pydantic
System role: Reporting API contracts
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from syntegra.models.common import ListParams


class IndividualReportParams(ListParams):
    """Options for a participant's individual report."""

    format: Literal["json", "pdf", "html"] | None = None
    include_charts: bool | None = None
    include_detailed_analysis: bool | None = None
    include_recommendations: bool | None = None
    include_comparison_data: bool | None = None
    session_filter: str | None = None
    date_from: str | None = None
    date_to: str | None = None
    language: Literal["id", "en"] | None = None


class SessionSummaryReportParams(ListParams):
    """Options for a session summary report."""

    format: Literal["json", "pdf", "html"] | None = None
    include_charts: bool | None = None
    include_participant_breakdown: bool | None = None
    include_test_analysis: bool | None = None
    include_trends: bool | None = None
    language: Literal["id", "en"] | None = None


class ReportDocument(BaseModel):
    """Generated report body; structure is owned by the backend."""

    model_config = ConfigDict(extra="allow")

    report_type: str | None = None
    generated_at: str | None = None


class ReportCapacity(BaseModel):
    individual_reports_per_hour: int = 0
    batch_reports_per_hour: int = 0
    max_concurrent_reports: int = 0


class ReportStats(BaseModel):
    """Availability counters for the reports page."""

    model_config = ConfigDict(extra="allow")

    total_test_results: int = 0
    total_sessions: int = 0
    total_participants: int = 0
    recent_results_30_days: int = 0
    recent_sessions_30_days: int = 0
    report_generation_capacity: ReportCapacity = Field(default_factory=ReportCapacity)
    data_availability: dict[str, Any] = Field(default_factory=dict)

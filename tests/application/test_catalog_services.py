"""
Test suite for test catalog, user, dashboard and report services.

System role: Verification of catalog and read-model orchestration
"""

import pytest

from syntegra.application.services import DashboardService, PsychTestService, ReportService, UserService
from syntegra.boundary.query_cache import QueryKeys
from syntegra.core.exceptions import ActionFailedError, BackendRequestError
from syntegra.core.validation import validate_form
from syntegra.models.report import IndividualReportParams
from syntegra.models.test import CreateTestRequest
from syntegra.models.user import CreateUserRequest, UpdateUserRequest


def _build(cls, mock_api_client, query_cache, query_settings):
    return cls(mock_api_client, query_cache, token="admin-token", query_settings=query_settings)


class TestPsychTestService:
    """Test catalog mutations and their cache effects."""

    @pytest.fixture
    def service(self, mock_api_client, query_cache, query_settings) -> PsychTestService:
        return _build(PsychTestService, mock_api_client, query_cache, query_settings)

    @pytest.mark.asyncio
    async def test_create_refreshes_session_test_picker(
        self, service, mock_api_client, query_cache, envelope
    ) -> None:
        query_cache.set(service.scope, QueryKeys.sessions.available_tests(), "picker")
        query_cache.set(service.scope, QueryKeys.tests.stats(), "stats")
        mock_api_client.post.return_value = envelope({"id": "t1", "name": "Raven Standard"})
        request = validate_form(
            CreateTestRequest,
            {"name": "Raven Standard", "module_type": "intelligence", "category": "raven", "time_limit": 45},
        )

        result = await service.create_test(request)

        assert result.data.id == "t1"
        assert result.notifications[0].title == "Tes berhasil dibuat!"
        assert len(query_cache) == 0

    @pytest.mark.asyncio
    async def test_delete_uses_cached_name(self, service, mock_api_client, query_cache, envelope) -> None:
        query_cache.set(service.scope, QueryKeys.tests.detail("t1"), envelope({"id": "t1", "name": "Raven Standard"}))
        mock_api_client.delete.return_value = envelope(None)

        result = await service.delete_test("t1")

        assert result.notifications[0].description == "Raven Standard telah dihapus dari sistem"
        assert query_cache.get(service.scope, QueryKeys.tests.detail("t1")) == (False, None)

    @pytest.mark.asyncio
    async def test_stats_cached(self, service, mock_api_client, envelope) -> None:
        mock_api_client.get.return_value = envelope({"total_tests": 12})

        await service.get_stats()
        await service.get_stats()

        mock_api_client.get.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_duplicate_failure(self, service, mock_api_client) -> None:
        mock_api_client.post.side_effect = BackendRequestError("Test not found", status_code=404)

        with pytest.raises(ActionFailedError) as exc_info:
            await service.duplicate_test("t1")

        assert exc_info.value.status_code == 404
        assert exc_info.value.toast.title == "Gagal menduplikasi tes"
        assert exc_info.value.toast.description == "Test not found"


class TestUserService:
    """Account creation dispatches by role."""

    @pytest.fixture
    def service(self, mock_api_client, query_cache, query_settings) -> UserService:
        return _build(UserService, mock_api_client, query_cache, query_settings)

    @pytest.mark.asyncio
    async def test_create_admin_refreshes_proctors(
        self, service, mock_api_client, query_cache, envelope
    ) -> None:
        query_cache.set(service.scope, QueryKeys.sessions.proctors(), "proctors")
        mock_api_client.post.return_value = envelope(
            {"id": "u1", "name": "Admin", "role": "admin", "email": "admin@syntegra.co.id"}
        )
        request = validate_form(
            CreateUserRequest,
            {"name": "Admin", "email": "admin@syntegra.co.id", "role": "admin", "password": "Rahasia@2026"},
        )

        result = await service.create_user(request)

        assert result.notifications[0].title == "Admin berhasil dibuat!"
        assert query_cache.get(service.scope, QueryKeys.sessions.proctors()) == (False, None)

    @pytest.mark.asyncio
    async def test_create_participant_duplicate_nik(self, service, mock_api_client) -> None:
        mock_api_client.post.side_effect = BackendRequestError("NIK already registered", status_code=409)
        request = validate_form(
            CreateUserRequest,
            {
                "name": "Siti Rahma",
                "email": "siti@syntegra.co.id",
                "role": "participant",
                "nik": "3174012345678901",
            },
        )

        with pytest.raises(ActionFailedError) as exc_info:
            await service.create_user(request)

        assert exc_info.value.toast.title == "NIK sudah terdaftar"

    @pytest.mark.asyncio
    async def test_update_user(self, service, mock_api_client, envelope) -> None:
        mock_api_client.put.return_value = envelope(
            {"id": "u1", "name": "Siti", "role": "participant", "email": "siti@syntegra.co.id"}
        )

        result = await service.update_user("u1", UpdateUserRequest(name="Siti"))

        assert result.data.name == "Siti"
        assert result.notifications[0].title == "User berhasil diupdate"
        assert mock_api_client.put.await_args.args[0] == "/users/u1"


class TestReadModels:
    """Dashboard and report reads."""

    @pytest.mark.asyncio
    async def test_admin_dashboard(self, mock_api_client, query_cache, query_settings, envelope) -> None:
        service = _build(DashboardService, mock_api_client, query_cache, query_settings)
        mock_api_client.get.return_value = envelope({"overview": {"total_sessions": 3}})

        dashboard = await service.get_admin_dashboard()

        assert dashboard.overview.total_sessions == 3
        assert dashboard.recent_sessions == []

    @pytest.mark.asyncio
    async def test_dashboards_scoped_per_user(self, mock_api_client, query_cache, query_settings, envelope) -> None:
        mock_api_client.get.return_value = envelope({})
        first = DashboardService(mock_api_client, query_cache, token="a", query_settings=query_settings)
        second = DashboardService(mock_api_client, query_cache, token="b", query_settings=query_settings)

        await first.get_participant_dashboard()
        await second.get_participant_dashboard()

        assert mock_api_client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_individual_report_query(self, mock_api_client, query_cache, query_settings, envelope) -> None:
        service = _build(ReportService, mock_api_client, query_cache, query_settings)
        mock_api_client.get.return_value = envelope({"report_type": "individual"})

        report = await service.get_individual_report("u1", IndividualReportParams(format="json", include_charts=True))

        assert report.report_type == "individual"
        mock_api_client.get.assert_awaited_once_with(
            "/reports/individual/u1",
            params={"format": "json", "include_charts": "true"},
            token="admin-token",
        )

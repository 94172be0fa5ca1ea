"""
Test suite for SessionService.

Uses a mocked BackendApiClient and a real QueryCache.

System role: Verification of session use case orchestration
"""

from datetime import datetime, timedelta, timezone

import pytest

from syntegra.application.services import SessionService
from syntegra.boundary.query_cache import QueryKeys
from syntegra.core.exceptions import ActionFailedError, BackendRequestError, BackendUnavailableError
from syntegra.core.notifications import ToastVariant
from syntegra.core.validation import validate_form
from syntegra.models.session import CheckParticipantRequest, CreateSessionRequest, SessionStatus


@pytest.fixture
def service(mock_api_client, query_cache, query_settings) -> SessionService:
    return SessionService(mock_api_client, query_cache, token="admin-token", query_settings=query_settings)


class TestSessionReads:
    @pytest.mark.asyncio
    async def test_list_sessions_is_cached(self, service, mock_api_client, envelope, session_record) -> None:
        mock_api_client.get.return_value = envelope(
            [session_record], meta={"current_page": 1, "per_page": 10, "total": 1, "total_pages": 1}
        )

        first = await service.list_sessions()
        second = await service.list_sessions()

        assert first.items[0].session_code == "SEC-001"
        assert first.meta.total == 1
        assert second.items[0].id == first.items[0].id
        mock_api_client.get.assert_awaited_once_with("/sessions", params={}, token="admin-token")

    @pytest.mark.asyncio
    async def test_get_session_adds_schedule(self, service, mock_api_client, envelope, session_record) -> None:
        now = datetime.now(timezone.utc)
        mock_api_client.get.return_value = envelope(
            {
                **session_record,
                "start_time": (now - timedelta(hours=1)).isoformat(),
                "end_time": (now + timedelta(hours=3)).isoformat(),
            }
        )

        session = await service.get_session(session_record["id"])

        assert session.session_duration_hours == 4
        assert session.status_info.status == SessionStatus.ACTIVE
        assert 170 < session.time_remaining <= 180

    @pytest.mark.asyncio
    async def test_get_stats(self, service, mock_api_client, envelope) -> None:
        mock_api_client.get.return_value = envelope({"total_sessions": 4})

        assert await service.get_stats() == {"total_sessions": 4}
        assert mock_api_client.get.await_args.args[0] == "/sessions/stats/summary"

    @pytest.mark.asyncio
    async def test_available_tests_query(self, service, mock_api_client, envelope) -> None:
        mock_api_client.get.return_value = envelope([{"id": "t1", "name": "Raven"}])

        tests = await service.list_available_tests()

        assert tests[0].name == "Raven"
        mock_api_client.get.assert_awaited_once_with(
            "/tests", params={"status": "active", "limit": "100"}, token="admin-token"
        )

    @pytest.mark.asyncio
    async def test_read_errors_propagate(self, service, mock_api_client) -> None:
        mock_api_client.get.side_effect = BackendRequestError("Session not found", status_code=404)

        with pytest.raises(BackendRequestError):
            await service.get_session("missing")


class TestSessionMutations:
    @pytest.mark.asyncio
    async def test_create_session_invalidates_and_toasts(
        self, service, mock_api_client, query_cache, envelope, session_record, session_form
    ) -> None:
        query_cache.set(service.scope, QueryKeys.sessions.list(None), "stale page")
        query_cache.set(service.scope, QueryKeys.sessions.stats(), "stale stats")
        mock_api_client.post.return_value = envelope(session_record)

        result = await service.create_session(validate_form(CreateSessionRequest, session_form))

        assert result.data.id == session_record["id"]
        assert result.notifications[0].title == "Sesi berhasil dibuat!"
        assert "SEC-001" in result.notifications[0].description
        assert query_cache.get(service.scope, QueryKeys.sessions.list(None)) == (False, None)
        assert query_cache.get(service.scope, QueryKeys.sessions.stats()) == (False, None)
        hit, _ = query_cache.get(service.scope, QueryKeys.sessions.detail(session_record["id"]))
        assert hit is True

    @pytest.mark.asyncio
    async def test_create_session_maps_backend_message(
        self, service, mock_api_client, session_form
    ) -> None:
        mock_api_client.post.side_effect = BackendRequestError("Session code already exists", status_code=409)

        with pytest.raises(ActionFailedError) as exc_info:
            await service.create_session(validate_form(CreateSessionRequest, session_form))

        error = exc_info.value
        assert error.status_code == 409
        assert error.toast.variant == ToastVariant.ERROR
        assert error.toast.title == "Kode sesi sudah digunakan"

    @pytest.mark.asyncio
    async def test_success_false_maps_to_bad_request(self, service, mock_api_client, session_form) -> None:
        mock_api_client.post.side_effect = BackendRequestError("Invalid proctor")

        with pytest.raises(ActionFailedError) as exc_info:
            await service.create_session(validate_form(CreateSessionRequest, session_form))

        assert exc_info.value.status_code == 400
        assert exc_info.value.toast.title == "Proktor tidak valid"

    @pytest.mark.asyncio
    async def test_server_error_maps_to_bad_gateway(self, service, mock_api_client) -> None:
        mock_api_client.delete.side_effect = BackendRequestError("boom", status_code=500)

        with pytest.raises(ActionFailedError) as exc_info:
            await service.delete_session("s1")

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_unavailable_backend_propagates(self, service, mock_api_client) -> None:
        mock_api_client.delete.side_effect = BackendUnavailableError("Tidak dapat terhubung ke server")

        with pytest.raises(BackendUnavailableError):
            await service.delete_session("s1")

    @pytest.mark.asyncio
    async def test_delete_session_drops_participants(
        self, service, mock_api_client, query_cache, envelope
    ) -> None:
        query_cache.set(service.scope, QueryKeys.participants.list("s1", None), "participants")
        query_cache.set(service.scope, QueryKeys.sessions.detail("s1"), "detail")
        mock_api_client.delete.return_value = envelope(None)

        result = await service.delete_session("s1")

        assert result.data == {"id": "s1"}
        assert result.notifications[0].title == "Sesi berhasil dihapus"
        assert len(query_cache) == 0

    @pytest.mark.asyncio
    async def test_check_participant_sends_camel_case(self, service, mock_api_client, envelope) -> None:
        mock_api_client.post.return_value = envelope({"participant": {"name": "Budi"}})

        await service.check_participant(CheckParticipantRequest(session_code="SEC-001", phone="08123456789"))

        mock_api_client.post.assert_awaited_once_with(
            "/sessions/check-participant",
            json={"sessionCode": "SEC-001", "phone": "08123456789"},
            token="admin-token",
        )

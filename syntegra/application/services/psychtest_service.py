"""
Test configuration service orchestrator.

Coordinates the psychometric test catalog: listing, detail, statistics,
filter options and create/update/delete/duplicate.

Dependencies: syntegra.boundary, syntegra.models.test
System role: Test configuration use case orchestration
"""

import logging
from typing import Any

from syntegra.application.services.base import PortalService
from syntegra.boundary.query_cache import QueryKeys
from syntegra.core.notifications import Toast
from syntegra.models.common import ActionResult, PaginatedResult
from syntegra.models.test import (
    CreateTestRequest,
    PsychTest,
    PsychTestListParams,
    UpdateTestRequest,
)

logger = logging.getLogger(__name__)

TEST_LIST_STALE_SECONDS = 180
TEST_STATS_STALE_SECONDS = 120
FILTER_OPTIONS_STALE_SECONDS = 900


class PsychTestService(PortalService):
    """Test configuration service orchestrator."""

    def _after_catalog_change(self) -> None:
        self._invalidate(
            QueryKeys.tests.lists(),
            QueryKeys.tests.stats(),
            QueryKeys.tests.filter_options(),
            QueryKeys.sessions.available_tests(),
        )

    async def list_tests(self, params: PsychTestListParams | None = None) -> PaginatedResult[PsychTest]:
        params = params or PsychTestListParams()
        envelope = await self._query(
            QueryKeys.tests.list(params),
            "/tests",
            params=params.to_query(),
            stale_seconds=TEST_LIST_STALE_SECONDS,
        )
        return self._page(envelope, PsychTest)

    async def get_test(self, test_id: str) -> PsychTest:
        envelope = await self._query(QueryKeys.tests.detail(test_id), f"/tests/{test_id}")
        return PsychTest.model_validate(envelope.data)

    async def get_stats(self) -> dict[str, Any]:
        envelope = await self._query(
            QueryKeys.tests.stats(),
            "/tests/stats/summary",
            stale_seconds=TEST_STATS_STALE_SECONDS,
        )
        return envelope.data or {}

    async def get_filter_options(self) -> dict[str, Any]:
        envelope = await self._query(
            QueryKeys.tests.filter_options(),
            "/tests/filters/options",
            stale_seconds=FILTER_OPTIONS_STALE_SECONDS,
        )
        return envelope.data or {}

    async def create_test(self, request: CreateTestRequest) -> ActionResult[PsychTest]:
        """
        Create a test.

        Raises:
            ActionFailedError: Backend rejected the test
        """
        envelope = await self._mutate("tests.create", "post", "/tests", json=request.to_payload())
        test = PsychTest.model_validate(envelope.data)
        self._after_catalog_change()
        logger.info(f"{__name__}:create_test - created {test.id}")

        return ActionResult(
            data=test,
            notifications=[
                Toast.success("Tes berhasil dibuat!", f'Tes "{request.name}" telah ditambahkan ke sistem.')
            ],
        )

    async def update_test(self, test_id: str, request: UpdateTestRequest) -> ActionResult[PsychTest]:
        envelope = await self._mutate("tests.update", "put", f"/tests/{test_id}", json=request.to_payload())
        test = PsychTest.model_validate(envelope.data)
        self._invalidate(QueryKeys.tests.detail(test_id))
        self._after_catalog_change()

        return ActionResult(
            data=test,
            notifications=[Toast.success("Tes berhasil diperbarui!", f"{test.name} telah disimpan")],
        )

    async def delete_test(self, test_id: str) -> ActionResult[dict[str, Any]]:
        # Name for the toast; the record is gone after the delete
        hit, cached = self.cache.get(self.scope, QueryKeys.tests.detail(test_id))
        test_name = (cached.data or {}).get("name") if hit else None

        envelope = await self._mutate("tests.delete", "delete", f"/tests/{test_id}")
        self.cache.remove(QueryKeys.tests.detail(test_id))
        self._invalidate(QueryKeys.questions.test(test_id))
        self._after_catalog_change()
        logger.info(f"{__name__}:delete_test - deleted {test_id}")

        return ActionResult(
            data=envelope.data or {"id": test_id},
            notifications=[
                Toast.success("Tes berhasil dihapus!", f"{test_name or 'Tes'} telah dihapus dari sistem")
            ],
        )

    async def duplicate_test(self, test_id: str) -> ActionResult[PsychTest]:
        envelope = await self._mutate("tests.duplicate", "post", f"/tests/{test_id}/duplicate")
        test = PsychTest.model_validate(envelope.data)
        self._invalidate(QueryKeys.tests.lists(), QueryKeys.tests.stats())

        return ActionResult(
            data=test,
            notifications=[Toast.success("Tes berhasil diduplikasi!", f"{test.name} telah dibuat")],
        )

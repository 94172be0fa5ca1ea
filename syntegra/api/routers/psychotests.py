"""
Psychological test catalog API endpoints.

Routes:
- GET /tests - List tests
- POST /tests - Create test
- GET /tests/stats - Catalog statistics
- GET /tests/filter-options - Filter values for the catalog table
- GET /tests/categories - Categories allowed per module type
- GET /tests/{id} - Get test
- PUT /tests/{id} - Update test
- DELETE /tests/{id} - Delete test
- POST /tests/{id}/duplicate - Duplicate test

Dependencies: syntegra.application.services, syntegra.models.test
System role: Test catalog HTTP API
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from syntegra.api.deps.dependencies import get_test_service
from syntegra.api.routers.router_utils import handle_portal_errors
from syntegra.application.services import PsychTestService
from syntegra.models.common import ActionResult, PaginatedResult
from syntegra.models.test import (
    MODULE_TYPE_LABELS,
    CreateTestRequest,
    ModuleType,
    PsychTest,
    PsychTestListParams,
    UpdateTestRequest,
    categories_for,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tests", tags=["tests"])


@router.get("", response_model=PaginatedResult[PsychTest])
@handle_portal_errors
async def list_tests(
    params: Annotated[PsychTestListParams, Query()],
    test_service: PsychTestService = Depends(get_test_service),
) -> PaginatedResult[PsychTest]:
    return await test_service.list_tests(params)


@router.post("", response_model=ActionResult[PsychTest], status_code=201)
@handle_portal_errors
async def create_test(
    request: CreateTestRequest,
    test_service: PsychTestService = Depends(get_test_service),
) -> ActionResult[PsychTest]:
    """
    Create a test.

    Raises:
        HTTPException(422): Invalid form, including a category that does not
            belong to the chosen module type
        HTTPException(4xx): Backend rejected the test (toast attached)
    """
    logger.info("Creating test", extra={"module_type": request.module_type.value})
    return await test_service.create_test(request)


@router.get("/stats")
@handle_portal_errors
async def get_test_stats(
    test_service: PsychTestService = Depends(get_test_service),
) -> dict[str, Any]:
    return await test_service.get_stats()


@router.get("/filter-options")
@handle_portal_errors
async def get_filter_options(
    test_service: PsychTestService = Depends(get_test_service),
) -> dict[str, Any]:
    return await test_service.get_filter_options()


@router.get("/categories")
async def list_categories(module_type: ModuleType) -> dict[str, Any]:
    """Categories selectable for a module type, used to reset the category field."""
    return {
        "module_type": module_type.value,
        "label": MODULE_TYPE_LABELS[module_type],
        "categories": [category.value for category in categories_for(module_type)],
    }


@router.get("/{test_id}", response_model=PsychTest)
@handle_portal_errors
async def get_test(
    test_id: str,
    test_service: PsychTestService = Depends(get_test_service),
) -> PsychTest:
    return await test_service.get_test(test_id)


@router.put("/{test_id}", response_model=ActionResult[PsychTest])
@handle_portal_errors
async def update_test(
    test_id: str,
    request: UpdateTestRequest,
    test_service: PsychTestService = Depends(get_test_service),
) -> ActionResult[PsychTest]:
    return await test_service.update_test(test_id, request)


@router.delete("/{test_id}", response_model=ActionResult[dict[str, Any]])
@handle_portal_errors
async def delete_test(
    test_id: str,
    test_service: PsychTestService = Depends(get_test_service),
) -> ActionResult[dict[str, Any]]:
    logger.info("Deleting test", extra={"test_id": test_id})
    return await test_service.delete_test(test_id)


@router.post("/{test_id}/duplicate", response_model=ActionResult[PsychTest], status_code=201)
@handle_portal_errors
async def duplicate_test(
    test_id: str,
    test_service: PsychTestService = Depends(get_test_service),
) -> ActionResult[PsychTest]:
    return await test_service.duplicate_test(test_id)

"""
Health check API endpoints.

Routes: GET /health, GET /health/backend

Dependencies: syntegra.api.deps
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from syntegra.api.deps.dependencies import ServiceCache, get_service_cache
from syntegra.core.exceptions import BackendRequestError


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/backend", response_model=HealthResponse)
async def health_check_backend(cache: ServiceCache = Depends(get_service_cache)) -> HealthResponse:
    """Upstream REST backend reachability."""
    try:
        await cache.api_client.get("/health", token=cache.settings.backend_api.service_token)
    except BackendRequestError as e:
        return HealthResponse(status="degraded", message=e.message)
    return HealthResponse(status="healthy", message="Backend reachable")

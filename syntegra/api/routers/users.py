"""
User management API endpoints.

Routes:
- GET /users - List users
- POST /users - Create admin or participant
- GET /users/{id} - Get user
- PUT /users/{id} - Update user
- DELETE /users/{id} - Delete user

Dependencies: syntegra.application.services, syntegra.models.user
System role: User management HTTP API
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from syntegra.api.deps.dependencies import get_user_service
from syntegra.api.routers.router_utils import handle_portal_errors
from syntegra.application.services import UserService
from syntegra.models.common import ActionResult, PaginatedResult
from syntegra.models.user import CreateUserRequest, UpdateUserRequest, User, UserListParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=PaginatedResult[User])
@handle_portal_errors
async def list_users(
    params: Annotated[UserListParams, Query()],
    user_service: UserService = Depends(get_user_service),
) -> PaginatedResult[User]:
    return await user_service.list_users(params)


@router.post("", response_model=ActionResult[User], status_code=201)
@handle_portal_errors
async def create_user(
    request: CreateUserRequest,
    user_service: UserService = Depends(get_user_service),
) -> ActionResult[User]:
    """
    Create an admin (password required) or a participant (NIK required).

    Raises:
        HTTPException(422): Invalid form
        HTTPException(4xx): Email, NIK or phone already registered, or admin limit reached
    """
    logger.info("Creating user", extra={"role": request.role.value})
    return await user_service.create_user(request)


@router.get("/{user_id}", response_model=User)
@handle_portal_errors
async def get_user(
    user_id: str,
    user_service: UserService = Depends(get_user_service),
) -> User:
    return await user_service.get_user(user_id)


@router.put("/{user_id}", response_model=ActionResult[User])
@handle_portal_errors
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    user_service: UserService = Depends(get_user_service),
) -> ActionResult[User]:
    return await user_service.update_user(user_id, request)


@router.delete("/{user_id}", response_model=ActionResult[dict[str, Any]])
@handle_portal_errors
async def delete_user(
    user_id: str,
    user_service: UserService = Depends(get_user_service),
) -> ActionResult[dict[str, Any]]:
    logger.info("Deleting user", extra={"user_id": user_id})
    return await user_service.delete_user(user_id)

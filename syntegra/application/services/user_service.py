"""
User service orchestrator.

Coordinates admin and participant accounts.

Dependencies: syntegra.boundary, syntegra.models.user
System role: User management use case orchestration
"""

import logging
from typing import Any

from syntegra.application.services.base import PortalService
from syntegra.boundary.query_cache import QueryKeys
from syntegra.core.notifications import Toast
from syntegra.models.common import ActionResult, PaginatedResult
from syntegra.models.user import CreateUserRequest, Role, UpdateUserRequest, User, UserListParams

logger = logging.getLogger(__name__)

_CREATE_COPY = {
    Role.ADMIN: (
        "users.create_admin",
        Toast.success("Admin berhasil dibuat!", "Akun admin telah berhasil ditambahkan ke sistem"),
    ),
    Role.PARTICIPANT: (
        "users.create_participant",
        Toast.success("Peserta berhasil didaftarkan!", "Akun peserta telah berhasil dibuat"),
    ),
}


class UserService(PortalService):
    """User service orchestrator."""

    async def list_users(self, params: UserListParams | None = None) -> PaginatedResult[User]:
        params = params or UserListParams()
        envelope = await self._query(QueryKeys.users.list(params), "/users", params=params.to_query())
        return self._page(envelope, User)

    async def get_user(self, user_id: str) -> User:
        envelope = await self._query(QueryKeys.users.detail(user_id), f"/users/{user_id}")
        return User.model_validate(envelope.data)

    async def create_user(self, request: CreateUserRequest) -> ActionResult[User]:
        """
        Create an admin or participant account.

        Raises:
            ActionFailedError: Email/NIK/phone already taken or admin limit reached
        """
        operation, toast = _CREATE_COPY[request.role]
        envelope = await self._mutate(operation, "post", "/users", json=request.to_payload())
        user = User.model_validate(envelope.data)

        self._invalidate(QueryKeys.users.lists())
        if request.role == Role.ADMIN:
            self._invalidate(QueryKeys.sessions.proctors())
        logger.info(f"{__name__}:create_user - created {request.role.value} {user.id}")

        return ActionResult(data=user, notifications=[toast])

    async def update_user(self, user_id: str, request: UpdateUserRequest) -> ActionResult[User]:
        envelope = await self._mutate("users.update", "put", f"/users/{user_id}", json=request.to_payload())
        user = User.model_validate(envelope.data)
        self._invalidate(QueryKeys.users.detail(user_id), QueryKeys.users.lists())

        return ActionResult(
            data=user,
            notifications=[Toast.success("User berhasil diupdate", "Data user telah berhasil diperbarui")],
        )

    async def delete_user(self, user_id: str) -> ActionResult[dict[str, Any]]:
        envelope = await self._mutate("users.delete", "delete", f"/users/{user_id}")
        self.cache.remove(QueryKeys.users.detail(user_id))
        self._invalidate(QueryKeys.users.lists(), QueryKeys.sessions.proctors())
        logger.info(f"{__name__}:delete_user - deleted {user_id}")

        return ActionResult(
            data=envelope.data or {"id": user_id},
            notifications=[
                Toast.success("User berhasil dihapus", "Data user telah berhasil dihapus dari sistem")
            ],
        )

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.tables import UserTable
from db.models import utcnow
from db.postgres import get_async_session
from repositories.user_repo_pg import UserRepositoryPg
from services.result import ErrorKind, Result
from users.user_model import UserOut

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: AsyncSession, users: UserRepositoryPg) -> None:
        self._session = session
        self._users = users

    async def list_users(self) -> List[UserTable]:
        return await self._users.list_all()

    async def _visible(self, caller: UserTable, user_id: uuid.UUID) -> Optional[UserTable]:
        # By-id lookups are limited to the caller's own record unless the caller is a superuser
        if caller.id != user_id and not caller.is_superuser:
            logger.warning("User %s denied access to user %s", caller.id, user_id)
            return None
        user = await self._users.get_by_id(user_id)
        if user is None:
            logger.warning("User not found: ID %s", user_id)
        return user

    async def get_user(self, caller: UserTable, user_id: uuid.UUID) -> Result[UserOut]:
        user = await self._visible(caller, user_id)
        if user is None:
            return Result.not_found("User not found")
        return Result.success(UserOut.model_validate(user))

    async def update_user(
        self,
        caller: UserTable,
        user_id: uuid.UUID,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Result[UserOut]:
        user = await self._visible(caller, user_id)
        if user is None:
            return Result.not_found("User not found")

        if email is not None and email.lower() != user.email.lower():
            if await self._users.get_by_email(email) is not None:
                return Result.failure(ErrorKind.VALIDATION, "Email is already registered")
            user.email = email
        if username is not None and username.lower() != (user.username or "").lower():
            if await self._users.get_by_username(username) is not None:
                return Result.failure(ErrorKind.VALIDATION, "Username is already taken")
            user.username = username

        user.updated_at = utcnow()
        await self._session.commit()
        logger.info("User updated: ID %s", user_id)
        return Result.success(UserOut.model_validate(user))

    async def delete_user(self, caller: UserTable, user_id: uuid.UUID) -> Result[None]:
        user = await self._visible(caller, user_id)
        if user is None:
            return Result.not_found("User not found")
        await self._users.delete(user)
        await self._session.commit()
        logger.info("User deleted: ID %s", user_id)
        return Result.success()


def get_user_service(session: AsyncSession = Depends(get_async_session)) -> UserService:
    return UserService(session, UserRepositoryPg(session))

from __future__ import annotations

from typing import AsyncIterator, Optional

from fastapi_users_db_sqlalchemy import SQLAlchemyUserDatabase
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db.postgres import get_session_factory
from .tables import UserTable


class UserDatabase(SQLAlchemyUserDatabase):
    """SQLAlchemy user store with username lookup for registration checks."""

    async def get_by_username(self, username: str) -> Optional[UserTable]:
        stmt = select(self.user_table).where(func.lower(self.user_table.username) == func.lower(username))
        return await self._get_user(stmt)


async def get_user_db() -> AsyncIterator[UserDatabase]:
    session_factory = get_session_factory()
    async with session_factory() as session:  # type: AsyncSession
        yield UserDatabase(session, UserTable)

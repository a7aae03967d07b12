from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from auth.tables import UserTable as User


class UserRepositoryPg:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        res = await self._session.execute(stmt)
        return res.scalars().first()

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        res = await self._session.execute(stmt)
        return res.scalars().first()

    async def get_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.username) == username.lower())
        res = await self._session.execute(stmt)
        return res.scalars().first()

    async def list_all(self) -> list[User]:
        res = await self._session.execute(select(User).order_by(User.created_at))
        return list(res.scalars().all())

    async def delete(self, user: User) -> None:
        await self._session.delete(user)
        await self._session.flush()

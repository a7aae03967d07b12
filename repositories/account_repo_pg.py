from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Account


class AccountRepositoryPg:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, account: Account) -> Account:
        self._session.add(account)
        await self._session.flush()
        return account

    async def get_by_id(self, account_id: int) -> Optional[Account]:
        res = await self._session.execute(select(Account).where(Account.id == account_id))
        return res.scalars().first()

    async def get_for_update(self, account_id: int) -> Optional[Account]:
        """Load an account and hold a row lock until the session commits or rolls back."""
        stmt = select(Account).where(Account.id == account_id).with_for_update()
        res = await self._session.execute(stmt)
        return res.scalars().first()

    async def list_for_user(self, user_id: uuid.UUID) -> list[Account]:
        stmt = select(Account).where(Account.user_id == user_id).order_by(Account.id)
        res = await self._session.execute(stmt)
        return list(res.scalars().all())

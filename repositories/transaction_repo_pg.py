from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import Select, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Transaction, utcnow


class TransactionRepositoryPg:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, transaction: Transaction) -> Transaction:
        self._session.add(transaction)
        await self._session.flush()
        return transaction

    async def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        stmt = select(Transaction).where(Transaction.id == transaction_id, Transaction.is_deleted.is_(False))
        res = await self._session.execute(stmt)
        return res.scalars().first()

    async def list_for_user(self, user_id: uuid.UUID, skip: int = 0, take: int = 10) -> list[Transaction]:
        stmt: Select[tuple[Transaction]] = (
            select(Transaction)
            .where(Transaction.user_id == user_id, Transaction.is_deleted.is_(False))
            .order_by(desc(Transaction.date), desc(Transaction.id))
            .offset(skip)
            .limit(take)
        )
        res = await self._session.execute(stmt)
        return list(res.scalars().all())

    async def soft_delete(self, transaction: Transaction) -> None:
        transaction.is_deleted = True
        transaction.updated_at = utcnow()
        await self._session.flush()

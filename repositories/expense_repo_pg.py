from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Select, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Expense


class ExpenseRepositoryPg:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, expense: Expense) -> Expense:
        self._session.add(expense)
        await self._session.flush()
        return expense

    async def get_by_id(self, expense_id: int) -> Optional[Expense]:
        res = await self._session.execute(select(Expense).where(Expense.id == expense_id))
        return res.scalars().first()

    async def list_for_user(
        self,
        user_id: uuid.UUID,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Expense]:
        stmt: Select[tuple[Expense]] = select(Expense).where(Expense.user_id == user_id)
        if start_date:
            stmt = stmt.where(Expense.date >= start_date)
        if end_date:
            stmt = stmt.where(Expense.date <= end_date)
        stmt = stmt.order_by(desc(Expense.date))
        res = await self._session.execute(stmt)
        return list(res.scalars().all())

    async def delete(self, expense: Expense) -> None:
        await self._session.delete(expense)
        await self._session.flush()

    async def total_for_user(self, user_id: uuid.UUID) -> Decimal:
        stmt = select(func.coalesce(func.sum(Expense.amount), 0)).where(Expense.user_id == user_id)
        res = await self._session.execute(stmt)
        return Decimal(res.scalar_one())

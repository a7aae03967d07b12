from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Income


class IncomeRepositoryPg:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, income: Income) -> Income:
        self._session.add(income)
        await self._session.flush()
        return income

    async def get_by_id(self, income_id: int) -> Optional[Income]:
        res = await self._session.execute(select(Income).where(Income.id == income_id))
        return res.scalars().first()

    async def list_for_user(self, user_id: uuid.UUID) -> list[Income]:
        stmt = select(Income).where(Income.user_id == user_id).order_by(desc(Income.date))
        res = await self._session.execute(stmt)
        return list(res.scalars().all())

    async def delete(self, income: Income) -> None:
        await self._session.delete(income)
        await self._session.flush()

    async def total_for_user(self, user_id: uuid.UUID) -> Decimal:
        stmt = select(func.coalesce(func.sum(Income.amount), 0)).where(Income.user_id == user_id)
        res = await self._session.execute(stmt)
        return Decimal(res.scalar_one())

    async def total_for_period(self, user_id: uuid.UUID, start_date: datetime, end_date: datetime) -> Decimal:
        stmt = select(func.coalesce(func.sum(Income.amount), 0)).where(
            Income.user_id == user_id,
            Income.date >= start_date,
            Income.date <= end_date,
        )
        res = await self._session.execute(stmt)
        return Decimal(res.scalar_one())

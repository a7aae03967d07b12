from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Budget, BudgetCategory

BUCKET_FOREIGN_KEYS = {
    "needs": BudgetCategory.needs_budget_id,
    "wants": BudgetCategory.wants_budget_id,
    "savings": BudgetCategory.savings_budget_id,
}


class BudgetRepositoryPg:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, budget: Budget) -> Budget:
        self._session.add(budget)
        await self._session.flush()
        return budget

    async def save(self, budget: Budget) -> Budget:
        # Flushes bucket replacements; orphaned categories are deleted
        self._session.add(budget)
        await self._session.flush()
        return budget

    async def get_by_id(self, budget_id: int) -> Optional[Budget]:
        res = await self._session.execute(select(Budget).where(Budget.id == budget_id))
        return res.scalars().first()

    async def list_for_user(self, user_id: uuid.UUID) -> list[Budget]:
        stmt = select(Budget).where(Budget.user_id == user_id).order_by(Budget.id)
        res = await self._session.execute(stmt)
        return list(res.scalars().all())

    async def current_for_user(self, user_id: uuid.UUID, at: datetime) -> Optional[Budget]:
        """
        The budget whose period covers `at` (latest start wins), else the most recently created one.
        """
        active = (
            select(Budget)
            .where(Budget.user_id == user_id, Budget.start_date <= at, Budget.end_date >= at)
            .order_by(desc(Budget.start_date), desc(Budget.id))
            .limit(1)
        )
        res = await self._session.execute(active)
        budget = res.scalars().first()
        if budget is not None:
            return budget
        latest = select(Budget).where(Budget.user_id == user_id).order_by(desc(Budget.id)).limit(1)
        res = await self._session.execute(latest)
        return res.scalars().first()

    async def delete(self, budget: Budget) -> None:
        await self._session.delete(budget)
        await self._session.flush()

    async def sum_bucket(self, user_id: uuid.UUID, bucket: str) -> Decimal:
        fk = BUCKET_FOREIGN_KEYS[bucket]
        stmt = (
            select(func.coalesce(func.sum(BudgetCategory.value), 0))
            .join(Budget, fk == Budget.id)
            .where(Budget.user_id == user_id)
        )
        res = await self._session.execute(stmt)
        return Decimal(res.scalar_one())

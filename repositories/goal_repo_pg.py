from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Goal


class GoalRepositoryPg:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, goal: Goal) -> Goal:
        self._session.add(goal)
        await self._session.flush()
        return goal

    async def get_by_id(self, goal_id: int) -> Optional[Goal]:
        res = await self._session.execute(select(Goal).where(Goal.id == goal_id))
        return res.scalars().first()

    async def list_for_user(self, user_id: uuid.UUID) -> list[Goal]:
        stmt = select(Goal).where(Goal.user_id == user_id).order_by(Goal.target_date)
        res = await self._session.execute(stmt)
        return list(res.scalars().all())

    async def delete(self, goal: Goal) -> None:
        await self._session.delete(goal)
        await self._session.flush()

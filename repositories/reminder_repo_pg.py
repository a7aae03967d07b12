from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Reminder


class ReminderRepositoryPg:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, reminder: Reminder) -> Reminder:
        self._session.add(reminder)
        await self._session.flush()
        return reminder

    async def get_by_id(self, reminder_id: int) -> Optional[Reminder]:
        res = await self._session.execute(select(Reminder).where(Reminder.id == reminder_id))
        return res.scalars().first()

    async def list_for_user(self, user_id: uuid.UUID) -> list[Reminder]:
        stmt = select(Reminder).where(Reminder.user_id == user_id).order_by(Reminder.due_date)
        res = await self._session.execute(stmt)
        return list(res.scalars().all())

    async def upcoming_for_user(self, user_id: uuid.UUID, until: datetime) -> list[Reminder]:
        stmt = (
            select(Reminder)
            .where(Reminder.user_id == user_id, Reminder.due_date <= until, Reminder.is_completed.is_(False))
            .order_by(Reminder.due_date)
        )
        res = await self._session.execute(stmt)
        return list(res.scalars().all())

    async def delete(self, reminder: Reminder) -> None:
        await self._session.delete(reminder)
        await self._session.flush()

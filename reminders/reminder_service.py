from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Reminder
from db.postgres import get_async_session
from reminders.reminder_model import ReminderCreate, ReminderRead, ReminderUpdate
from repositories.reminder_repo_pg import ReminderRepositoryPg
from services.result import Result

logger = logging.getLogger(__name__)


class ReminderService:
    def __init__(self, session: AsyncSession, reminders: ReminderRepositoryPg) -> None:
        self._session = session
        self._reminders = reminders

    async def list_reminders(self, user_id: uuid.UUID) -> List[ReminderRead]:
        return [ReminderRead.model_validate(r) for r in await self._reminders.list_for_user(user_id)]

    async def _owned(self, user_id: uuid.UUID, reminder_id: int) -> Optional[Reminder]:
        reminder = await self._reminders.get_by_id(reminder_id)
        if reminder is None or reminder.user_id != user_id:
            logger.warning("Reminder not found or unauthorized: ID %s, User %s", reminder_id, user_id)
            return None
        return reminder

    async def get_reminder(self, user_id: uuid.UUID, reminder_id: int) -> Result[ReminderRead]:
        reminder = await self._owned(user_id, reminder_id)
        if reminder is None:
            return Result.not_found("Reminder not found")
        return Result.success(ReminderRead.model_validate(reminder))

    async def add_reminder(self, user_id: uuid.UUID, payload: ReminderCreate) -> Result[ReminderRead]:
        reminder = Reminder(user_id=user_id, **payload.model_dump())
        await self._reminders.add(reminder)
        await self._session.commit()
        logger.info("Reminder %s added for user %s", reminder.id, user_id)
        return Result.success(ReminderRead.model_validate(reminder))

    async def update_reminder(self, user_id: uuid.UUID, reminder_id: int, payload: ReminderUpdate) -> Result[ReminderRead]:
        reminder = await self._owned(user_id, reminder_id)
        if reminder is None:
            return Result.not_found("Reminder not found")
        for field, value in payload.model_dump().items():
            setattr(reminder, field, value)
        await self._session.commit()
        logger.info("Reminder updated: ID %s, User %s", reminder_id, user_id)
        return Result.success(ReminderRead.model_validate(reminder))

    async def delete_reminder(self, user_id: uuid.UUID, reminder_id: int) -> Result[None]:
        reminder = await self._owned(user_id, reminder_id)
        if reminder is None:
            return Result.not_found("Reminder not found")
        await self._reminders.delete(reminder)
        await self._session.commit()
        logger.info("Reminder deleted: ID %s, User %s", reminder_id, user_id)
        return Result.success()

    async def get_upcoming(self, user_id: uuid.UUID, until: datetime) -> List[ReminderRead]:
        """Incomplete reminders due on or before ``until``, soonest first."""
        rows = await self._reminders.upcoming_for_user(user_id, until)
        return [ReminderRead.model_validate(r) for r in rows]

    async def get_upcoming_within(self, user_id: uuid.UUID, days: int) -> List[ReminderRead]:
        return await self.get_upcoming(user_id, datetime.now(timezone.utc) + timedelta(days=days))


def get_reminder_service(session: AsyncSession = Depends(get_async_session)) -> ReminderService:
    return ReminderService(session, ReminderRepositoryPg(session))

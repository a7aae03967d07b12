import uuid
from datetime import datetime, timedelta, timezone

import pytest

from reminders.reminder_model import ReminderCreate
from reminders.reminder_service import ReminderService
from services.result import ErrorKind


@pytest.fixture
def service(session, reminder_repo) -> ReminderService:
    return ReminderService(session, reminder_repo)


def _reminder(title: str, due: datetime, done: bool = False) -> ReminderCreate:
    return ReminderCreate(title=title, description=f"{title} is due", due_date=due, is_completed=done)


@pytest.mark.asyncio
async def test_upcoming_returns_incomplete_due_reminders_in_order(service: ReminderService, user_id):
    now = datetime.now(timezone.utc)
    await service.add_reminder(user_id, _reminder("Rent", now + timedelta(hours=20)))
    await service.add_reminder(user_id, _reminder("Phone", now + timedelta(hours=2)))
    await service.add_reminder(user_id, _reminder("Paid already", now + timedelta(hours=1), done=True))
    await service.add_reminder(user_id, _reminder("Next week", now + timedelta(days=7)))

    upcoming = await service.get_upcoming(user_id, now + timedelta(days=1))

    assert [r.title for r in upcoming] == ["Phone", "Rent"]


@pytest.mark.asyncio
async def test_get_foreign_reminder_is_not_found(service: ReminderService, user_id):
    created = (await service.add_reminder(user_id, _reminder("Tax", datetime.now(timezone.utc)))).value

    result = await service.get_reminder(uuid.uuid4(), created.id)

    assert result.error.kind is ErrorKind.NOT_FOUND

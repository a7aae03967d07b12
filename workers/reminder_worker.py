from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from arq import cron
from arq.connections import RedisSettings
from sqlalchemy.ext.asyncio import AsyncSession

from db.postgres import close_postgres, get_session_factory
from reminders.reminder_notifier import ReminderNotifier
from repositories.reminder_repo_pg import ReminderRepositoryPg
from repositories.user_repo_pg import UserRepositoryPg
from settings.config import settings
from settings.logging_config import configure_logging

logger = logging.getLogger(__name__)


async def sweep_reminders(
    session: AsyncSession,
    users: UserRepositoryPg,
    reminders: ReminderRepositoryPg,
    notifier: ReminderNotifier,
    lookahead_days: int,
    now: Optional[datetime] = None,
) -> dict:
    """
    Notify every user about incomplete reminders due within the lookahead window.

    Users are processed one after another. A failure for one user is logged
    and counted, the session is rolled back so later queries run in a fresh
    transaction, and the sweep moves on to the next user.
    """
    until = (now or datetime.now(timezone.utc)) + timedelta(days=lookahead_days)
    # Rollback expires loaded users, so keep plain values
    recipients = [(user.id, user.email) for user in await users.list_all()]
    notified = 0
    failed = 0
    for user_id, email in recipients:
        try:
            due = await reminders.upcoming_for_user(user_id, until)
            for reminder in due:
                await notifier.notify(email, reminder)
                notified += 1
        except Exception:
            failed += 1
            logger.exception("Reminder sweep failed for user %s", user_id)
            await session.rollback()
    logger.info("Reminder sweep finished: %d users, %d notified, %d failed", len(recipients), notified, failed)
    return {"users": len(recipients), "notified": notified, "failed": failed}


async def send_reminder_notifications(ctx: dict[str, Any]) -> dict:
    session_factory = get_session_factory()
    async with session_factory() as session:
        return await sweep_reminders(
            session,
            UserRepositoryPg(session),
            ReminderRepositoryPg(session),
            ctx.get("notifier") or ReminderNotifier(),
            settings.REMINDER_LOOKAHEAD_DAYS,
        )


async def startup(ctx: dict[str, Any]) -> None:
    configure_logging(settings.LOG_LEVEL)
    ctx["notifier"] = ReminderNotifier()


async def shutdown(ctx: dict[str, Any]) -> None:
    await close_postgres()


class WorkerSettings:
    functions = [send_reminder_notifications]
    redis_settings = RedisSettings.from_dsn(settings.REDIS_URL or "redis://localhost:6379")
    on_startup = startup
    on_shutdown = shutdown
    # Daily at 08:00 UTC
    cron_jobs = [cron(send_reminder_notifications, hour=8, minute=0)]

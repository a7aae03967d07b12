from __future__ import annotations

import logging
from email.message import EmailMessage

from aiosmtplib import SMTP

from db.models import Reminder
from settings.config import settings

logger = logging.getLogger(__name__)


def smtp_configured() -> bool:
    return bool(settings.SMTP_HOST and settings.SMTP_PORT and settings.ALERTS_FROM_EMAIL)


def build_reminder_message(to_email: str, reminder: Reminder) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = settings.ALERTS_FROM_EMAIL
    msg["To"] = to_email
    msg["Subject"] = f"Reminder: {reminder.title}"
    msg.set_content(f"{reminder.description}\n\nDue: {reminder.due_date:%Y-%m-%d %H:%M} UTC")
    return msg


class ReminderNotifier:
    """
    Delivers reminder notifications by email.

    Without SMTP settings the notification is only logged. SMTP failures
    propagate so the caller can count them.
    """

    async def notify(self, to_email: str, reminder: Reminder) -> bool:
        if not smtp_configured():
            logger.info("Reminder %s for %s due %s (SMTP not configured)", reminder.id, to_email, reminder.due_date)
            return False
        smtp = SMTP(hostname=settings.SMTP_HOST, port=settings.SMTP_PORT)
        await smtp.connect()
        try:
            if settings.SMTP_USER and settings.SMTP_PASS:
                await smtp.starttls()
                await smtp.login(settings.SMTP_USER, settings.SMTP_PASS)
            await smtp.send_message(build_reminder_message(to_email, reminder))
        finally:
            await smtp.quit()
        logger.info("Reminder %s emailed to %s", reminder.id, to_email)
        return True

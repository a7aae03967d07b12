from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from auth.auth import get_current_user
from reminders.reminder_model import ReminderCreate, ReminderRead, ReminderUpdate
from reminders.reminder_service import ReminderService, get_reminder_service
from settings.errors import unwrap


router = APIRouter(prefix="/api/reminder", tags=["reminder"])


@router.get("", response_model=List[ReminderRead])
async def list_reminders(
    user_id: uuid.UUID = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
) -> List[ReminderRead]:
    return await service.list_reminders(user_id)


@router.post("", response_model=ReminderRead, status_code=status.HTTP_201_CREATED)
async def add_reminder(
    payload: ReminderCreate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderRead:
    return unwrap(await service.add_reminder(user_id, payload))


@router.get("/upcoming", response_model=List[ReminderRead])
async def upcoming_reminders(
    days: int = Query(1, ge=0, le=365),
    user_id: uuid.UUID = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
) -> List[ReminderRead]:
    return await service.get_upcoming_within(user_id, days)


@router.get("/{reminder_id}", response_model=ReminderRead)
async def get_reminder(
    reminder_id: int,
    user_id: uuid.UUID = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderRead:
    return unwrap(await service.get_reminder(user_id, reminder_id))


@router.put("/{reminder_id}", response_model=ReminderRead)
async def update_reminder(
    reminder_id: int,
    payload: ReminderUpdate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderRead:
    return unwrap(await service.update_reminder(user_id, reminder_id, payload))


@router.delete("/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reminder(
    reminder_id: int,
    user_id: uuid.UUID = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
) -> Response:
    unwrap(await service.delete_reminder(user_id, reminder_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field

from schemas.common import UtcDatetime


class ReminderCreate(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(max_length=500)
    due_date: UtcDatetime
    is_completed: bool = False


class ReminderUpdate(ReminderCreate):
    pass


class ReminderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: uuid.UUID
    title: str
    description: str
    due_date: UtcDatetime
    is_completed: bool

from __future__ import annotations

import uuid
from typing import Optional

from fastapi_users import schemas
from pydantic import Field


class UserRead(schemas.BaseUser[uuid.UUID]):
    username: Optional[str] = None


class UserCreate(schemas.BaseUserCreate):
    username: Optional[str] = Field(default=None, min_length=3, max_length=50)


class UserUpdate(schemas.BaseUserUpdate):
    username: Optional[str] = Field(default=None, min_length=3, max_length=50)

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.common import PositiveMoney, UtcDatetime


class IncomeCreate(BaseModel):
    amount: PositiveMoney
    date: UtcDatetime
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=50)


class IncomeUpdate(IncomeCreate):
    pass


class IncomeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: uuid.UUID
    amount: Decimal
    date: UtcDatetime
    description: Optional[str] = None
    category: Optional[str] = None


class IncomeTotal(BaseModel):
    start_date: UtcDatetime
    end_date: UtcDatetime
    total: Decimal

from __future__ import annotations

import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.common import PositiveMoney, UtcDatetime


class TransactionType(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"


class TransactionCreate(BaseModel):
    amount: PositiveMoney
    description: Optional[str] = Field(default=None, max_length=200)
    date: UtcDatetime
    category: Optional[str] = Field(default=None, max_length=50)
    type: TransactionType


class TransactionUpdate(TransactionCreate):
    pass


class TransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: uuid.UUID
    amount: Decimal
    description: Optional[str] = None
    date: UtcDatetime
    category: Optional[str] = None
    type: TransactionType

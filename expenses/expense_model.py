from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.common import PositiveMoney, UtcDatetime


class ExpenseCreate(BaseModel):
    amount: PositiveMoney
    description: str = Field(min_length=1, max_length=100)
    date: UtcDatetime
    category: str = Field(min_length=1, max_length=50)
    pay: Optional[str] = Field(default=None, max_length=50)


class ExpenseUpdate(ExpenseCreate):
    pass


class ExpenseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: uuid.UUID
    amount: Decimal
    description: str
    date: UtcDatetime
    category: str
    pay: Optional[str] = None


class FinancialSummary(BaseModel):
    total_income: Decimal
    total_expenses: Decimal
    # May be negative when spending exceeds income
    total_savings: Decimal

from __future__ import annotations

import uuid
from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from schemas.common import NonNegativeMoney, PositiveMoney, UtcDatetime


class BudgetBucket(str, Enum):
    NEEDS = "needs"
    WANTS = "wants"
    SAVINGS = "savings"


class BudgetCategoryIn(BaseModel):
    category: str = Field(min_length=1, max_length=100)
    value: NonNegativeMoney


class BudgetCategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    category: str
    value: Decimal


class BudgetCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    amount: PositiveMoney
    start_date: UtcDatetime
    end_date: UtcDatetime

    @model_validator(mode="after")
    def _check_period(self) -> "BudgetCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be earlier than start_date")
        return self


class BudgetUpdate(BudgetCreate):
    pass


class BudgetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: uuid.UUID
    name: str
    amount: Decimal
    start_date: UtcDatetime
    end_date: UtcDatetime
    needs: List[BudgetCategoryRead] = Field(default_factory=list)
    wants: List[BudgetCategoryRead] = Field(default_factory=list)
    savings: List[BudgetCategoryRead] = Field(default_factory=list)


class BudgetTotals(BaseModel):
    needs: Decimal = Decimal("0")
    wants: Decimal = Decimal("0")
    savings: Decimal = Decimal("0")
    income: Decimal = Decimal("0")

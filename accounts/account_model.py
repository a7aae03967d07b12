from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.common import NonNegativeMoney, PositiveMoney


class AccountCreate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    opening_balance: NonNegativeMoney = Decimal("0.00")


class AccountRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: uuid.UUID
    name: Optional[str] = None
    balance: Decimal


class TransferRequest(BaseModel):
    from_account_id: int
    to_account_id: int
    amount: PositiveMoney


class TransferResult(BaseModel):
    from_account: AccountRead
    to_account: AccountRead
    amount: Decimal

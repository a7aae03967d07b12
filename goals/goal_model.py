from __future__ import annotations

import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from schemas.common import NonNegativeMoney, PositiveMoney, UtcDatetime


class GoalCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    target_amount: PositiveMoney
    current_amount: NonNegativeMoney = Decimal("0.00")
    start_date: UtcDatetime
    target_date: UtcDatetime
    is_completed: bool = False

    @model_validator(mode="after")
    def _check_dates(self) -> "GoalCreate":
        if self.target_date <= self.start_date:
            raise ValueError("target_date must be after start_date")
        return self


class GoalUpdate(GoalCreate):
    pass


class GoalRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: uuid.UUID
    name: str
    target_amount: Decimal
    current_amount: Decimal
    start_date: UtcDatetime
    target_date: UtcDatetime
    is_completed: bool

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress_percentage(self) -> Decimal:
        if not self.target_amount:
            return Decimal("0")
        pct = self.current_amount / self.target_amount * 100
        return pct.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class GoalRecommendations(BaseModel):
    goal_id: int
    recommendations: List[str]

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class TaxRequest(BaseModel):
    income: Decimal = Field(max_digits=18, decimal_places=2)
    deductions: Decimal = Decimal("0")
    filing_status: Optional[str] = Field(default=None, max_length=50)


class TaxBreakdown(BaseModel):
    personal_income_tax: Decimal
    pension_disability: Decimal
    health: Decimal
    unemployment: Decimal
    total: Decimal

from __future__ import annotations

from fastapi import APIRouter

from settings.errors import unwrap
from tax.tax_model import TaxBreakdown, TaxRequest
from tax.tax_service import calculate_tax


router = APIRouter(prefix="/api/tax", tags=["tax"])


@router.post("/calculate", response_model=TaxBreakdown)
async def calculate(payload: TaxRequest) -> TaxBreakdown:
    return unwrap(calculate_tax(payload.income, payload.deductions, payload.filing_status))

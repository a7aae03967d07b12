from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from services.result import ErrorKind, Result
from tax.tax_model import TaxBreakdown

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

PERSONAL_INCOME_RATE = Decimal("0.10")
PENSION_DISABILITY_RATE = Decimal("0.188")
HEALTH_RATE = Decimal("0.075")
UNEMPLOYMENT_RATE = Decimal("0.012")


def _component(income: Decimal, rate: Decimal) -> Decimal:
    return (income * rate).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_tax(
    income: Decimal,
    deductions: Decimal = Decimal("0"),
    filing_status: Optional[str] = None,
) -> Result[TaxBreakdown]:
    """
    Flat-rate contributions on gross income.

    ``deductions`` and ``filing_status`` are accepted for API compatibility
    and do not change the result.
    """
    if income <= 0:
        logger.warning("Rejected tax calculation for non-positive income %s", income)
        return Result.failure(ErrorKind.VALIDATION, "Income must be greater than zero")

    pit = _component(income, PERSONAL_INCOME_RATE)
    pension = _component(income, PENSION_DISABILITY_RATE)
    health = _component(income, HEALTH_RATE)
    unemployment = _component(income, UNEMPLOYMENT_RATE)
    return Result.success(
        TaxBreakdown(
            personal_income_tax=pit,
            pension_disability=pension,
            health=health,
            unemployment=unemployment,
            total=pit + pension + health + unemployment,
        )
    )

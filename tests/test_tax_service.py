from decimal import Decimal

import pytest
from fastapi import HTTPException

from services.result import ErrorKind
from tax.tax_model import TaxRequest
from tax.tax_routes import calculate
from tax.tax_service import calculate_tax


def test_tax_on_1000_totals_375():
    result = calculate_tax(Decimal("1000"))

    assert result.value.personal_income_tax == Decimal("100.00")
    assert result.value.pension_disability == Decimal("188.00")
    assert result.value.health == Decimal("75.00")
    assert result.value.unemployment == Decimal("12.00")
    assert result.value.total == Decimal("375.00")


def test_components_round_half_up_to_cents():
    result = calculate_tax(Decimal("1234.56"))

    assert result.value.personal_income_tax == Decimal("123.46")
    assert result.value.pension_disability == Decimal("232.10")
    assert result.value.health == Decimal("92.59")
    assert result.value.unemployment == Decimal("14.81")
    assert result.value.total == Decimal("462.96")


def test_deductions_and_filing_status_do_not_change_result():
    plain = calculate_tax(Decimal("1000"))
    with_extras = calculate_tax(Decimal("1000"), Decimal("250"), "married")

    assert plain.value == with_extras.value


@pytest.mark.parametrize("income", ["0", "-10"])
def test_non_positive_income_is_validation_error(income):
    result = calculate_tax(Decimal(income))

    assert result.error.kind is ErrorKind.VALIDATION


@pytest.mark.asyncio
async def test_route_maps_validation_error_to_400():
    with pytest.raises(HTTPException) as exc_info:
        await calculate(TaxRequest(income=Decimal("0")))

    assert exc_info.value.status_code == 400

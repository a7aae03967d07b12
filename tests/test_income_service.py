from datetime import datetime, timezone
from decimal import Decimal

import pytest

from incomes.income_model import IncomeCreate, IncomeUpdate
from incomes.income_service import IncomeService
from services.result import ErrorKind


@pytest.fixture
def service(session, income_repo) -> IncomeService:
    return IncomeService(session, income_repo)


def _income(amount: str, day: int) -> IncomeCreate:
    return IncomeCreate(amount=Decimal(amount), date=datetime(2025, 5, day, tzinfo=timezone.utc), category="Salary")


@pytest.mark.asyncio
async def test_delete_missing_income_is_not_found(service: IncomeService, user_id):
    result = await service.delete_income(user_id, 5)

    assert result.error.kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_total_for_period_is_inclusive(service: IncomeService, user_id):
    await service.add_income(user_id, _income("100", 1))
    await service.add_income(user_id, _income("200", 15))
    await service.add_income(user_id, _income("400", 31))

    result = await service.total_for_period(
        user_id,
        datetime(2025, 5, 1, tzinfo=timezone.utc),
        datetime(2025, 5, 15, tzinfo=timezone.utc),
    )

    assert result.value.total == Decimal("300")


@pytest.mark.asyncio
async def test_total_for_period_rejects_inverted_range(service: IncomeService, user_id):
    result = await service.total_for_period(
        user_id,
        datetime(2025, 6, 1, tzinfo=timezone.utc),
        datetime(2025, 5, 1, tzinfo=timezone.utc),
    )

    assert result.error.kind is ErrorKind.VALIDATION


@pytest.mark.asyncio
async def test_update_income(service: IncomeService, session, user_id):
    created = (await service.add_income(user_id, _income("100", 1))).value

    updated = await service.update_income(user_id, created.id, IncomeUpdate(**_income("150", 2).model_dump()))

    assert updated.value.amount == Decimal("150")
    assert session.commits == 2

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from services.result import ErrorKind
from transactions.transaction_model import TransactionCreate, TransactionType, TransactionUpdate
from transactions.transaction_service import TransactionService


@pytest.fixture
def service(session, transaction_repo) -> TransactionService:
    return TransactionService(session, transaction_repo)


def _payload(amount: str, days_ago: int = 0, kind: TransactionType = TransactionType.EXPENSE) -> TransactionCreate:
    return TransactionCreate(
        amount=Decimal(amount),
        description="Coffee",
        date=datetime.now(timezone.utc) - timedelta(days=days_ago),
        category="Food",
        type=kind,
    )


@pytest.mark.asyncio
async def test_soft_delete_hides_transaction(service: TransactionService, transaction_repo, user_id):
    created = (await service.add_transaction(user_id, _payload("3.50"))).value

    assert (await service.delete_transaction(user_id, created.id)).ok

    assert await service.list_transactions(user_id) == []
    assert transaction_repo.rows[created.id].is_deleted is True


@pytest.mark.asyncio
async def test_delete_twice_is_not_found(service: TransactionService, user_id):
    created = (await service.add_transaction(user_id, _payload("3.50"))).value
    await service.delete_transaction(user_id, created.id)

    result = await service.delete_transaction(user_id, created.id)

    assert result.error.kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_delete_missing_transaction_is_not_found(service: TransactionService, session, user_id):
    result = await service.delete_transaction(user_id, 12345)

    assert result.error.kind is ErrorKind.NOT_FOUND
    assert session.commits == 0


@pytest.mark.asyncio
async def test_list_is_paged_newest_first(service: TransactionService, user_id):
    oldest = (await service.add_transaction(user_id, _payload("1", days_ago=3))).value
    middle = (await service.add_transaction(user_id, _payload("2", days_ago=2))).value
    newest = (await service.add_transaction(user_id, _payload("3", days_ago=1, kind=TransactionType.INCOME))).value

    first_page = await service.list_transactions(user_id, skip=0, take=2)
    second_page = await service.list_transactions(user_id, skip=2, take=2)

    assert [t.id for t in first_page] == [newest.id, middle.id]
    assert [t.id for t in second_page] == [oldest.id]
    assert first_page[0].type is TransactionType.INCOME


@pytest.mark.asyncio
async def test_update_foreign_transaction_is_not_found(service: TransactionService, user_id):
    created = (await service.add_transaction(user_id, _payload("9"))).value

    result = await service.update_transaction(uuid.uuid4(), created.id, TransactionUpdate(**_payload("1").model_dump()))

    assert result.error.kind is ErrorKind.NOT_FOUND

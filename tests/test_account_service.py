import uuid
from decimal import Decimal

import pytest

from accounts.account_model import AccountCreate
from accounts.account_service import AccountService
from db.models import Account
from services.result import ErrorKind


@pytest.fixture
def service(session, account_repo) -> AccountService:
    return AccountService(session, account_repo)


async def _open(account_repo, user_id, balance: str) -> Account:
    return await account_repo.add(Account(user_id=user_id, name=f"acct-{balance}", balance=Decimal(balance)))


@pytest.mark.asyncio
async def test_transfer_scenario(service: AccountService, account_repo, session, user_id):
    a = await _open(account_repo, user_id, "500")
    b = await _open(account_repo, user_id, "100")

    first = await service.transfer(user_id, a.id, b.id, Decimal("200"))
    assert first.ok
    assert (a.balance, b.balance) == (Decimal("300"), Decimal("300"))
    assert first.value.from_account.balance == Decimal("300")

    second = await service.transfer(user_id, a.id, b.id, Decimal("400"))
    assert second.error.kind is ErrorKind.INSUFFICIENT_FUNDS
    assert (a.balance, b.balance) == (Decimal("300"), Decimal("300"))
    assert session.commits == 1


@pytest.mark.asyncio
async def test_transfer_conserves_total(service: AccountService, account_repo, user_id):
    a = await _open(account_repo, user_id, "1234.56")
    b = await _open(account_repo, user_id, "0.44")

    await service.transfer(user_id, a.id, b.id, Decimal("1000.01"))
    await service.transfer(user_id, b.id, a.id, Decimal("0.45"))

    assert a.balance + b.balance == Decimal("1235.00")


@pytest.mark.asyncio
async def test_same_account_rejected_before_balance_check(service: AccountService, account_repo, session, user_id):
    a = await _open(account_repo, user_id, "10")

    result = await service.transfer(user_id, a.id, a.id, Decimal("999"))

    assert result.error.kind is ErrorKind.INVARIANT
    assert account_repo.lock_order == []
    assert a.balance == Decimal("10")
    assert session.commits == 0


@pytest.mark.asyncio
async def test_transfer_missing_account_is_not_found(service: AccountService, account_repo, user_id):
    a = await _open(account_repo, user_id, "50")

    result = await service.transfer(user_id, a.id, 999, Decimal("5"))

    assert result.error.kind is ErrorKind.NOT_FOUND
    assert a.balance == Decimal("50")


@pytest.mark.asyncio
async def test_transfer_from_foreign_account_is_not_found(service: AccountService, account_repo, user_id):
    theirs = await _open(account_repo, uuid.uuid4(), "500")
    mine = await _open(account_repo, user_id, "0")

    result = await service.transfer(user_id, theirs.id, mine.id, Decimal("100"))

    assert result.error.kind is ErrorKind.NOT_FOUND
    assert theirs.balance == Decimal("500")


@pytest.mark.asyncio
async def test_transfer_locks_accounts_in_id_order(service: AccountService, account_repo, user_id):
    a = await _open(account_repo, user_id, "10")
    b = await _open(account_repo, user_id, "10")

    await service.transfer(user_id, b.id, a.id, Decimal("5"))

    assert account_repo.lock_order == [a.id, b.id]


@pytest.mark.asyncio
async def test_transfer_rolls_back_when_commit_fails(service: AccountService, account_repo, session, user_id):
    a = await _open(account_repo, user_id, "100")
    b = await _open(account_repo, user_id, "0")
    session.fail_on_commit = RuntimeError("connection lost")

    with pytest.raises(RuntimeError):
        await service.transfer(user_id, a.id, b.id, Decimal("40"))

    assert session.rollbacks == 1
    assert session.commits == 0


@pytest.mark.asyncio
async def test_open_and_list_accounts(service: AccountService, user_id):
    opened = await service.open_account(user_id, AccountCreate(name="Checking", opening_balance=Decimal("25.00")))

    accounts = await service.list_accounts(user_id)

    assert [acc.id for acc in accounts] == [opened.value.id]
    assert accounts[0].balance == Decimal("25.00")

from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from accounts.account_model import AccountCreate, AccountRead, TransferResult
from db.models import Account
from db.postgres import get_async_session
from repositories.account_repo_pg import AccountRepositoryPg
from services.result import ErrorKind, Result

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, session: AsyncSession, accounts: AccountRepositoryPg) -> None:
        self._session = session
        self._accounts = accounts

    async def list_accounts(self, user_id: uuid.UUID) -> List[AccountRead]:
        accounts = await self._accounts.list_for_user(user_id)
        return [AccountRead.model_validate(a) for a in accounts]

    async def open_account(self, user_id: uuid.UUID, payload: AccountCreate) -> Result[AccountRead]:
        account = Account(user_id=user_id, name=payload.name, balance=payload.opening_balance)
        await self._accounts.add(account)
        await self._session.commit()
        logger.info("Account %s opened for user %s", account.id, user_id)
        return Result.success(AccountRead.model_validate(account))

    async def transfer(
        self,
        user_id: uuid.UUID,
        from_account_id: int,
        to_account_id: int,
        amount: Decimal,
    ) -> Result[TransferResult]:
        """
        Move ``amount`` between two of the caller's accounts.

        Both rows are locked in ascending id order, debited and credited,
        then committed once. Any failure rolls back both balance changes.
        """
        if from_account_id == to_account_id:
            logger.warning("Rejected transfer to the same account %s for user %s", from_account_id, user_id)
            return Result.failure(ErrorKind.INVARIANT, "Cannot transfer to the same account")
        if amount <= 0:
            return Result.failure(ErrorKind.VALIDATION, "Transfer amount must be positive")

        try:
            locked: dict[int, Optional[Account]] = {}
            for account_id in sorted((from_account_id, to_account_id)):
                locked[account_id] = await self._accounts.get_for_update(account_id)

            source = locked[from_account_id]
            target = locked[to_account_id]
            if source is None or target is None or source.user_id != user_id or target.user_id != user_id:
                await self._session.rollback()
                logger.warning(
                    "Transfer account not found: from %s to %s, User %s", from_account_id, to_account_id, user_id
                )
                return Result.not_found("Account not found")

            if source.balance < amount:
                await self._session.rollback()
                logger.warning("Insufficient funds in account %s for user %s", from_account_id, user_id)
                return Result.failure(ErrorKind.INSUFFICIENT_FUNDS, "Insufficient funds")

            source.balance = source.balance - amount
            target.balance = target.balance + amount
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

        logger.info("Transferred %s from account %s to %s for user %s", amount, from_account_id, to_account_id, user_id)
        return Result.success(
            TransferResult(
                from_account=AccountRead.model_validate(source),
                to_account=AccountRead.model_validate(target),
                amount=amount,
            )
        )


def get_account_service(session: AsyncSession = Depends(get_async_session)) -> AccountService:
    return AccountService(session, AccountRepositoryPg(session))

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Transaction, utcnow
from db.postgres import get_async_session
from repositories.transaction_repo_pg import TransactionRepositoryPg
from services.result import Result
from transactions.transaction_model import TransactionCreate, TransactionRead, TransactionUpdate

logger = logging.getLogger(__name__)


class TransactionService:
    def __init__(self, session: AsyncSession, transactions: TransactionRepositoryPg) -> None:
        self._session = session
        self._transactions = transactions

    async def list_transactions(self, user_id: uuid.UUID, skip: int = 0, take: int = 10) -> List[TransactionRead]:
        rows = await self._transactions.list_for_user(user_id, skip=skip, take=take)
        return [TransactionRead.model_validate(t) for t in rows]

    async def add_transaction(self, user_id: uuid.UUID, payload: TransactionCreate) -> Result[TransactionRead]:
        transaction = Transaction(
            user_id=user_id,
            amount=payload.amount,
            description=payload.description,
            date=payload.date,
            category=payload.category,
            type=payload.type.value,
        )
        await self._transactions.add(transaction)
        await self._session.commit()
        logger.info("Transaction %s added for user %s", transaction.id, user_id)
        return Result.success(TransactionRead.model_validate(transaction))

    async def _owned(self, user_id: uuid.UUID, transaction_id: int) -> Optional[Transaction]:
        transaction = await self._transactions.get_by_id(transaction_id)
        if transaction is None or transaction.user_id != user_id:
            logger.warning("Transaction not found or unauthorized: ID %s, User %s", transaction_id, user_id)
            return None
        return transaction

    async def update_transaction(
        self, user_id: uuid.UUID, transaction_id: int, payload: TransactionUpdate
    ) -> Result[TransactionRead]:
        transaction = await self._owned(user_id, transaction_id)
        if transaction is None:
            return Result.not_found("Transaction not found")
        transaction.amount = payload.amount
        transaction.description = payload.description
        transaction.date = payload.date
        transaction.category = payload.category
        transaction.type = payload.type.value
        transaction.updated_at = utcnow()
        await self._session.commit()
        logger.info("Transaction updated: ID %s, User %s", transaction_id, user_id)
        return Result.success(TransactionRead.model_validate(transaction))

    async def delete_transaction(self, user_id: uuid.UUID, transaction_id: int) -> Result[None]:
        transaction = await self._owned(user_id, transaction_id)
        if transaction is None:
            return Result.not_found("Transaction not found")
        await self._transactions.soft_delete(transaction)
        await self._session.commit()
        logger.info("Transaction soft-deleted: ID %s, User %s", transaction_id, user_id)
        return Result.success()


def get_transaction_service(session: AsyncSession = Depends(get_async_session)) -> TransactionService:
    return TransactionService(session, TransactionRepositoryPg(session))

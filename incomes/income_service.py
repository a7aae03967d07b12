from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Income
from db.postgres import get_async_session
from incomes.income_model import IncomeCreate, IncomeRead, IncomeTotal, IncomeUpdate
from repositories.income_repo_pg import IncomeRepositoryPg
from schemas.common import as_utc
from services.result import ErrorKind, Result

logger = logging.getLogger(__name__)


class IncomeService:
    def __init__(self, session: AsyncSession, incomes: IncomeRepositoryPg) -> None:
        self._session = session
        self._incomes = incomes

    async def list_incomes(self, user_id: uuid.UUID) -> List[IncomeRead]:
        return [IncomeRead.model_validate(i) for i in await self._incomes.list_for_user(user_id)]

    async def _owned(self, user_id: uuid.UUID, income_id: int) -> Optional[Income]:
        income = await self._incomes.get_by_id(income_id)
        if income is None or income.user_id != user_id:
            logger.warning("Income not found or unauthorized: ID %s, User %s", income_id, user_id)
            return None
        return income

    async def get_income(self, user_id: uuid.UUID, income_id: int) -> Result[IncomeRead]:
        income = await self._owned(user_id, income_id)
        if income is None:
            return Result.not_found("Income not found")
        return Result.success(IncomeRead.model_validate(income))

    async def add_income(self, user_id: uuid.UUID, payload: IncomeCreate) -> Result[IncomeRead]:
        income = Income(
            user_id=user_id,
            amount=payload.amount,
            date=payload.date,
            description=payload.description,
            category=payload.category,
        )
        await self._incomes.add(income)
        await self._session.commit()
        logger.info("Income %s added for user %s", income.id, user_id)
        return Result.success(IncomeRead.model_validate(income))

    async def update_income(self, user_id: uuid.UUID, income_id: int, payload: IncomeUpdate) -> Result[IncomeRead]:
        income = await self._owned(user_id, income_id)
        if income is None:
            return Result.not_found("Income not found")
        income.amount = payload.amount
        income.date = payload.date
        income.description = payload.description
        income.category = payload.category
        await self._session.commit()
        logger.info("Income updated: ID %s, User %s", income_id, user_id)
        return Result.success(IncomeRead.model_validate(income))

    async def delete_income(self, user_id: uuid.UUID, income_id: int) -> Result[None]:
        income = await self._owned(user_id, income_id)
        if income is None:
            return Result.not_found("Income not found")
        await self._incomes.delete(income)
        await self._session.commit()
        logger.info("Income deleted: ID %s, User %s", income_id, user_id)
        return Result.success()

    async def total_for_period(self, user_id: uuid.UUID, start_date: datetime, end_date: datetime) -> Result[IncomeTotal]:
        """Sum of income amounts dated within ``[start_date, end_date]``."""
        start_date, end_date = as_utc(start_date), as_utc(end_date)
        if end_date < start_date:
            return Result.failure(ErrorKind.VALIDATION, "end_date must not be earlier than start_date")
        total = await self._incomes.total_for_period(user_id, start_date, end_date)
        return Result.success(IncomeTotal(start_date=start_date, end_date=end_date, total=total))


def get_income_service(session: AsyncSession = Depends(get_async_session)) -> IncomeService:
    return IncomeService(session, IncomeRepositoryPg(session))

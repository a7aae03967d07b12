from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Expense
from db.postgres import get_async_session
from expenses.expense_model import ExpenseCreate, ExpenseRead, ExpenseUpdate, FinancialSummary
from repositories.expense_repo_pg import ExpenseRepositoryPg
from repositories.income_repo_pg import IncomeRepositoryPg
from schemas.common import as_utc
from services.result import Result

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(self, session: AsyncSession, expenses: ExpenseRepositoryPg, incomes: IncomeRepositoryPg) -> None:
        self._session = session
        self._expenses = expenses
        self._incomes = incomes

    async def list_expenses(
        self,
        user_id: uuid.UUID,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[ExpenseRead]:
        start_date = as_utc(start_date) if start_date else None
        end_date = as_utc(end_date) if end_date else None
        rows = await self._expenses.list_for_user(user_id, start_date=start_date, end_date=end_date)
        return [ExpenseRead.model_validate(e) for e in rows]

    async def add_expense(self, user_id: uuid.UUID, payload: ExpenseCreate) -> Result[ExpenseRead]:
        expense = Expense(
            user_id=user_id,
            amount=payload.amount,
            description=payload.description,
            date=payload.date,
            category=payload.category,
            pay=payload.pay,
        )
        await self._expenses.add(expense)
        await self._session.commit()
        logger.info("Expense %s added for user %s", expense.id, user_id)
        return Result.success(ExpenseRead.model_validate(expense))

    async def _owned(self, user_id: uuid.UUID, expense_id: int) -> Optional[Expense]:
        expense = await self._expenses.get_by_id(expense_id)
        if expense is None or expense.user_id != user_id:
            logger.warning("Expense not found or unauthorized: ID %s, User %s", expense_id, user_id)
            return None
        return expense

    async def update_expense(self, user_id: uuid.UUID, expense_id: int, payload: ExpenseUpdate) -> Result[ExpenseRead]:
        expense = await self._owned(user_id, expense_id)
        if expense is None:
            return Result.not_found("Expense not found")
        expense.amount = payload.amount
        expense.description = payload.description
        expense.date = payload.date
        expense.category = payload.category
        expense.pay = payload.pay
        await self._session.commit()
        logger.info("Expense updated: ID %s, User %s", expense_id, user_id)
        return Result.success(ExpenseRead.model_validate(expense))

    async def delete_expense(self, user_id: uuid.UUID, expense_id: int) -> Result[None]:
        expense = await self._owned(user_id, expense_id)
        if expense is None:
            return Result.not_found("Expense not found")
        await self._expenses.delete(expense)
        await self._session.commit()
        logger.info("Expense deleted: ID %s, User %s", expense_id, user_id)
        return Result.success()

    async def get_financial_summary(self, user_id: uuid.UUID) -> FinancialSummary:
        total_income = await self._incomes.total_for_user(user_id)
        total_expenses = await self._expenses.total_for_user(user_id)
        return FinancialSummary(
            total_income=total_income,
            total_expenses=total_expenses,
            total_savings=total_income - total_expenses,
        )


def get_expense_service(session: AsyncSession = Depends(get_async_session)) -> ExpenseService:
    return ExpenseService(session, ExpenseRepositoryPg(session), IncomeRepositoryPg(session))

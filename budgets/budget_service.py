from __future__ import annotations

import calendar
import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from budgets.budget_model import (
    BudgetBucket,
    BudgetCategoryIn,
    BudgetCategoryRead,
    BudgetCreate,
    BudgetRead,
    BudgetTotals,
    BudgetUpdate,
)
from db.models import Budget, BudgetCategory
from db.postgres import get_async_session
from repositories.budget_repo_pg import BudgetRepositoryPg
from repositories.income_repo_pg import IncomeRepositoryPg
from services.result import ErrorKind, Result

logger = logging.getLogger(__name__)

DEFAULT_BUDGET_NAME = "Default Budget"


def add_one_month(value: datetime) -> datetime:
    """Same day next month, clamped to the month's last day."""
    year = value.year + value.month // 12
    month = value.month % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


class BudgetService:
    def __init__(self, session: AsyncSession, budgets: BudgetRepositoryPg, incomes: IncomeRepositoryPg) -> None:
        self._session = session
        self._budgets = budgets
        self._incomes = incomes

    async def add_budget(self, user_id: uuid.UUID, payload: BudgetCreate) -> Result[BudgetRead]:
        budget = Budget(
            user_id=user_id,
            name=payload.name,
            amount=payload.amount,
            start_date=payload.start_date,
            end_date=payload.end_date,
            needs=[],
            wants=[],
            savings=[],
        )
        await self._budgets.add(budget)
        await self._session.commit()
        logger.info("Budget %s added for user %s", budget.id, user_id)
        return Result.success(BudgetRead.model_validate(budget))

    async def list_budgets(self, user_id: uuid.UUID) -> List[BudgetRead]:
        budgets = await self._budgets.list_for_user(user_id)
        return [BudgetRead.model_validate(b) for b in budgets]

    async def _owned(self, user_id: uuid.UUID, budget_id: int) -> Budget | None:
        budget = await self._budgets.get_by_id(budget_id)
        if budget is None or budget.user_id != user_id:
            logger.warning("Budget not found or unauthorized: ID %s, User %s", budget_id, user_id)
            return None
        return budget

    async def get_budget(self, user_id: uuid.UUID, budget_id: int) -> Result[BudgetRead]:
        budget = await self._owned(user_id, budget_id)
        if budget is None:
            return Result.not_found("Budget not found")
        return Result.success(BudgetRead.model_validate(budget))

    async def update_budget(self, user_id: uuid.UUID, budget_id: int, payload: BudgetUpdate) -> Result[BudgetRead]:
        budget = await self._owned(user_id, budget_id)
        if budget is None:
            return Result.not_found("Budget not found")
        budget.name = payload.name
        budget.amount = payload.amount
        budget.start_date = payload.start_date
        budget.end_date = payload.end_date
        await self._budgets.save(budget)
        await self._session.commit()
        logger.info("Budget updated: ID %s, User %s", budget_id, user_id)
        return Result.success(BudgetRead.model_validate(budget))

    async def delete_budget(self, user_id: uuid.UUID, budget_id: int) -> Result[None]:
        budget = await self._owned(user_id, budget_id)
        if budget is None:
            return Result.not_found("Budget not found")
        await self._budgets.delete(budget)
        await self._session.commit()
        logger.info("Budget deleted: ID %s, User %s", budget_id, user_id)
        return Result.success()

    async def get_bucket(self, user_id: uuid.UUID, bucket: BudgetBucket) -> List[BudgetCategoryRead]:
        budget = await self._budgets.current_for_user(user_id, datetime.now(timezone.utc))
        if budget is None:
            return []
        return [BudgetCategoryRead.model_validate(c) for c in getattr(budget, bucket.value)]

    async def replace_bucket(
        self,
        user_id: uuid.UUID,
        bucket: BudgetBucket,
        items: Iterable[BudgetCategoryIn],
    ) -> Result[List[BudgetCategoryRead]]:
        """
        Replace the contents of one bucket of the user's current budget.

        A "Default Budget" spanning one month from now is created when the
        user has no budget yet; its amount is the sum of the submitted values.
        """
        items = list(items)
        if any(item.value < 0 for item in items):
            return Result.failure(ErrorKind.VALIDATION, "Category values must not be negative")

        now = datetime.now(timezone.utc)
        budget = await self._budgets.current_for_user(user_id, now)
        if budget is None:
            budget = Budget(
                user_id=user_id,
                name=DEFAULT_BUDGET_NAME,
                amount=sum((item.value for item in items), Decimal("0")),
                start_date=now,
                end_date=add_one_month(now),
                needs=[],
                wants=[],
                savings=[],
            )
            await self._budgets.add(budget)
            logger.info("Created default budget %s for user %s", budget.id, user_id)

        # The relationship stamps the bucket FK; the other two stay NULL
        categories = [BudgetCategory(category=item.category, value=item.value) for item in items]
        setattr(budget, bucket.value, categories)
        await self._budgets.save(budget)
        await self._session.commit()
        logger.info("Replaced %s for budget %s (%d categories)", bucket.value, budget.id, len(categories))
        return Result.success([BudgetCategoryRead.model_validate(c) for c in categories])

    async def get_totals(self, user_id: uuid.UUID) -> BudgetTotals:
        return BudgetTotals(
            needs=await self._budgets.sum_bucket(user_id, BudgetBucket.NEEDS.value),
            wants=await self._budgets.sum_bucket(user_id, BudgetBucket.WANTS.value),
            savings=await self._budgets.sum_bucket(user_id, BudgetBucket.SAVINGS.value),
            income=await self._incomes.total_for_user(user_id),
        )


def get_budget_service(session: AsyncSession = Depends(get_async_session)) -> BudgetService:
    return BudgetService(session, BudgetRepositoryPg(session), IncomeRepositoryPg(session))

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from auth.auth import get_current_user
from expenses.expense_model import ExpenseCreate, ExpenseRead, ExpenseUpdate, FinancialSummary
from expenses.expense_service import ExpenseService, get_expense_service
from settings.errors import unwrap


router = APIRouter(prefix="/api/expense", tags=["expense"])


@router.get("", response_model=List[ExpenseRead])
async def list_expenses(
    start_date: Optional[datetime] = Query(None, alias="from"),
    end_date: Optional[datetime] = Query(None, alias="to"),
    user_id: uuid.UUID = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
) -> List[ExpenseRead]:
    return await service.list_expenses(user_id, start_date=start_date, end_date=end_date)


@router.post("", response_model=ExpenseRead, status_code=status.HTTP_201_CREATED)
async def add_expense(
    payload: ExpenseCreate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
) -> ExpenseRead:
    return unwrap(await service.add_expense(user_id, payload))


@router.get("/financial-summary", response_model=FinancialSummary)
async def financial_summary(
    user_id: uuid.UUID = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
) -> FinancialSummary:
    return await service.get_financial_summary(user_id)


@router.put("/{expense_id}", response_model=ExpenseRead)
async def update_expense(
    expense_id: int,
    payload: ExpenseUpdate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
) -> ExpenseRead:
    return unwrap(await service.update_expense(user_id, expense_id, payload))


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: int,
    user_id: uuid.UUID = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
) -> Response:
    unwrap(await service.delete_expense(user_id, expense_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

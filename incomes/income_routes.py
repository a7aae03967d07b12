from __future__ import annotations

import uuid
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from auth.auth import get_current_user
from incomes.income_model import IncomeCreate, IncomeRead, IncomeTotal, IncomeUpdate
from incomes.income_service import IncomeService, get_income_service
from settings.errors import unwrap


router = APIRouter(prefix="/api/income", tags=["income"])


@router.get("", response_model=List[IncomeRead])
async def list_incomes(
    user_id: uuid.UUID = Depends(get_current_user),
    service: IncomeService = Depends(get_income_service),
) -> List[IncomeRead]:
    return await service.list_incomes(user_id)


@router.post("", response_model=IncomeRead, status_code=status.HTTP_201_CREATED)
async def add_income(
    payload: IncomeCreate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: IncomeService = Depends(get_income_service),
) -> IncomeRead:
    return unwrap(await service.add_income(user_id, payload))


@router.get("/total", response_model=IncomeTotal)
async def total_income(
    start_date: datetime = Query(...),
    end_date: datetime = Query(...),
    user_id: uuid.UUID = Depends(get_current_user),
    service: IncomeService = Depends(get_income_service),
) -> IncomeTotal:
    return unwrap(await service.total_for_period(user_id, start_date, end_date))


@router.get("/{income_id}", response_model=IncomeRead)
async def get_income(
    income_id: int,
    user_id: uuid.UUID = Depends(get_current_user),
    service: IncomeService = Depends(get_income_service),
) -> IncomeRead:
    return unwrap(await service.get_income(user_id, income_id))


@router.put("/{income_id}", response_model=IncomeRead)
async def update_income(
    income_id: int,
    payload: IncomeUpdate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: IncomeService = Depends(get_income_service),
) -> IncomeRead:
    return unwrap(await service.update_income(user_id, income_id, payload))


@router.delete("/{income_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_income(
    income_id: int,
    user_id: uuid.UUID = Depends(get_current_user),
    service: IncomeService = Depends(get_income_service),
) -> Response:
    unwrap(await service.delete_income(user_id, income_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

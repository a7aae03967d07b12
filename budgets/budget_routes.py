from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, Response, status

from accounts.account_model import TransferRequest, TransferResult
from accounts.account_service import AccountService, get_account_service
from auth.auth import get_current_user
from budgets.budget_model import (
    BudgetBucket,
    BudgetCategoryIn,
    BudgetCategoryRead,
    BudgetCreate,
    BudgetRead,
    BudgetTotals,
    BudgetUpdate,
)
from budgets.budget_service import BudgetService, get_budget_service
from settings.errors import unwrap


router = APIRouter(prefix="/api/budget", tags=["budget"])


@router.get("", response_model=List[BudgetRead])
async def list_budgets(
    user_id: uuid.UUID = Depends(get_current_user),
    service: BudgetService = Depends(get_budget_service),
) -> List[BudgetRead]:
    return await service.list_budgets(user_id)


@router.post("", response_model=BudgetRead, status_code=status.HTTP_201_CREATED)
async def add_budget(
    payload: BudgetCreate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: BudgetService = Depends(get_budget_service),
) -> BudgetRead:
    return unwrap(await service.add_budget(user_id, payload))


# Static paths are registered before /{budget_id}

@router.get("/needs", response_model=List[BudgetCategoryRead])
async def get_needs(
    user_id: uuid.UUID = Depends(get_current_user),
    service: BudgetService = Depends(get_budget_service),
) -> List[BudgetCategoryRead]:
    return await service.get_bucket(user_id, BudgetBucket.NEEDS)


@router.get("/wants", response_model=List[BudgetCategoryRead])
async def get_wants(
    user_id: uuid.UUID = Depends(get_current_user),
    service: BudgetService = Depends(get_budget_service),
) -> List[BudgetCategoryRead]:
    return await service.get_bucket(user_id, BudgetBucket.WANTS)


@router.get("/savings", response_model=List[BudgetCategoryRead])
async def get_savings(
    user_id: uuid.UUID = Depends(get_current_user),
    service: BudgetService = Depends(get_budget_service),
) -> List[BudgetCategoryRead]:
    return await service.get_bucket(user_id, BudgetBucket.SAVINGS)


@router.post("/submitNeeds", response_model=List[BudgetCategoryRead])
async def submit_needs(
    items: List[BudgetCategoryIn],
    user_id: uuid.UUID = Depends(get_current_user),
    service: BudgetService = Depends(get_budget_service),
) -> List[BudgetCategoryRead]:
    return unwrap(await service.replace_bucket(user_id, BudgetBucket.NEEDS, items))


@router.post("/submitWants", response_model=List[BudgetCategoryRead])
async def submit_wants(
    items: List[BudgetCategoryIn],
    user_id: uuid.UUID = Depends(get_current_user),
    service: BudgetService = Depends(get_budget_service),
) -> List[BudgetCategoryRead]:
    return unwrap(await service.replace_bucket(user_id, BudgetBucket.WANTS, items))


@router.post("/submitSavings", response_model=List[BudgetCategoryRead])
async def submit_savings(
    items: List[BudgetCategoryIn],
    user_id: uuid.UUID = Depends(get_current_user),
    service: BudgetService = Depends(get_budget_service),
) -> List[BudgetCategoryRead]:
    return unwrap(await service.replace_bucket(user_id, BudgetBucket.SAVINGS, items))


@router.get("/totals", response_model=BudgetTotals)
async def get_totals(
    user_id: uuid.UUID = Depends(get_current_user),
    service: BudgetService = Depends(get_budget_service),
) -> BudgetTotals:
    return await service.get_totals(user_id)


@router.post("/transfer", response_model=TransferResult)
async def transfer_funds(
    payload: TransferRequest,
    user_id: uuid.UUID = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
) -> TransferResult:
    return unwrap(await service.transfer(user_id, payload.from_account_id, payload.to_account_id, payload.amount))


@router.get("/{budget_id}", response_model=BudgetRead)
async def get_budget(
    budget_id: int,
    user_id: uuid.UUID = Depends(get_current_user),
    service: BudgetService = Depends(get_budget_service),
) -> BudgetRead:
    return unwrap(await service.get_budget(user_id, budget_id))


@router.put("/{budget_id}", response_model=BudgetRead)
async def update_budget(
    budget_id: int,
    payload: BudgetUpdate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: BudgetService = Depends(get_budget_service),
) -> BudgetRead:
    return unwrap(await service.update_budget(user_id, budget_id, payload))


@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(
    budget_id: int,
    user_id: uuid.UUID = Depends(get_current_user),
    service: BudgetService = Depends(get_budget_service),
) -> Response:
    unwrap(await service.delete_budget(user_id, budget_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

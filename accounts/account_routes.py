from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, status

from accounts.account_model import AccountCreate, AccountRead, TransferRequest, TransferResult
from accounts.account_service import AccountService, get_account_service
from auth.auth import get_current_user
from settings.errors import unwrap


router = APIRouter(prefix="/api/account", tags=["account"])
transfer_router = APIRouter(prefix="/api/transfer", tags=["transfer"])


@router.get("", response_model=List[AccountRead])
async def list_accounts(
    user_id: uuid.UUID = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
) -> List[AccountRead]:
    return await service.list_accounts(user_id)


@router.post("", response_model=AccountRead, status_code=status.HTTP_201_CREATED)
async def open_account(
    payload: AccountCreate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
) -> AccountRead:
    return unwrap(await service.open_account(user_id, payload))


@transfer_router.post("", response_model=TransferResult)
async def transfer_funds(
    payload: TransferRequest,
    user_id: uuid.UUID = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
) -> TransferResult:
    return unwrap(await service.transfer(user_id, payload.from_account_id, payload.to_account_id, payload.amount))

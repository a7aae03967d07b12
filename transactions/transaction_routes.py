from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from auth.auth import get_current_user
from settings.errors import unwrap
from transactions.transaction_model import TransactionCreate, TransactionRead, TransactionUpdate
from transactions.transaction_service import TransactionService, get_transaction_service


router = APIRouter(prefix="/api/transaction", tags=["transaction"])


@router.get("", response_model=List[TransactionRead])
async def list_transactions(
    skip: int = Query(0, ge=0),
    take: int = Query(10, ge=1, le=500),
    user_id: uuid.UUID = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> List[TransactionRead]:
    return await service.list_transactions(user_id, skip=skip, take=take)


@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def add_transaction(
    payload: TransactionCreate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionRead:
    return unwrap(await service.add_transaction(user_id, payload))


@router.put("/{transaction_id}", response_model=TransactionRead)
async def update_transaction(
    transaction_id: int,
    payload: TransactionUpdate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionRead:
    return unwrap(await service.update_transaction(user_id, transaction_id, payload))


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: int,
    user_id: uuid.UUID = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> Response:
    unwrap(await service.delete_transaction(user_id, transaction_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status

from auth.auth import get_current_active_user
from auth.tables import UserTable
from settings.errors import unwrap
from users.user_model import UserOut, UserUpdateIn
from users.user_service import UserService, get_user_service


router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/current-user", response_model=UserOut)
async def current_user(user: UserTable = Depends(get_current_active_user)) -> UserOut:
    return UserOut.model_validate(user)


@router.get("/{user_id}", response_model=UserOut)
async def get_user(
    user_id: uuid.UUID,
    caller: UserTable = Depends(get_current_active_user),
    service: UserService = Depends(get_user_service),
) -> UserOut:
    return unwrap(await service.get_user(caller, user_id))


@router.put("/{user_id}", response_model=UserOut)
async def update_user(
    user_id: uuid.UUID,
    payload: UserUpdateIn,
    caller: UserTable = Depends(get_current_active_user),
    service: UserService = Depends(get_user_service),
) -> UserOut:
    if payload.id != user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID mismatch")
    return unwrap(await service.update_user(caller, user_id, username=payload.username, email=payload.email))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: uuid.UUID,
    caller: UserTable = Depends(get_current_active_user),
    service: UserService = Depends(get_user_service),
) -> Response:
    unwrap(await service.delete_user(caller, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

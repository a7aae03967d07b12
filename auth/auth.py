from __future__ import annotations

import uuid

from fastapi_users import FastAPIUsers
from fastapi_users.authentication import AuthenticationBackend, BearerTransport, JWTStrategy
from fastapi import APIRouter, Depends

from .tables import UserTable
from .schemas import UserCreate, UserRead
from .user_manager import get_user_manager
from settings.config import settings


bearer_transport = BearerTransport(tokenUrl="/api/auth/jwt/login")


def get_jwt_strategy() -> JWTStrategy:
    return JWTStrategy(secret=settings.ENV_SECRET, lifetime_seconds=settings.JWT_LIFETIME_SECONDS)


auth_backend = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)


fastapi_users = FastAPIUsers[UserTable, uuid.UUID](
    get_user_manager,
    [auth_backend],
)


# Dependency to require an authenticated, active user and return the user's ID
_current_active_user = fastapi_users.current_user(active=True)

async def get_current_user(user: UserTable = Depends(_current_active_user)) -> uuid.UUID:
    return user.id

async def get_current_active_user(user: UserTable = Depends(_current_active_user)) -> UserTable:
    return user


router = APIRouter(prefix="/api/auth", tags=["auth"])
router.include_router(fastapi_users.get_auth_router(auth_backend), prefix="/jwt")
router.include_router(fastapi_users.get_register_router(UserRead, UserCreate))

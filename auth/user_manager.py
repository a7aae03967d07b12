import uuid
from typing import Optional, Union
import logging

from fastapi import Depends, Request
from fastapi_users import BaseUserManager, UUIDIDMixin, exceptions, models, schemas

from settings.config import settings
from .tables import UserTable
from .sqlalchemy_db import UserDatabase, get_user_db

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class UserManager(UUIDIDMixin, BaseUserManager[UserTable, uuid.UUID]):
    reset_password_token_secret = settings.ENV_RESET_PASSWORD_TOKEN_SECRET
    verification_token_secret = settings.ENV_VERIFICATION_TOKEN_SECRET

    async def validate_password(self, password: str, user: Union[schemas.UC, models.UP]) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise exceptions.InvalidPasswordException(
                reason=f"Password should be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if user.email and user.email.lower() in password.lower():
            raise exceptions.InvalidPasswordException(reason="Password should not contain e-mail")

    async def create(self, user_create: schemas.UC, safe: bool = False, request: Optional[Request] = None) -> models.UP:
        username = getattr(user_create, "username", None)
        if username and await self.user_db.get_by_username(username) is not None:
            logger.warning("Registration attempt with existing username: %s", username)
            raise exceptions.UserAlreadyExists()
        return await super().create(user_create, safe=safe, request=request)

    async def on_after_register(self, user: UserTable, request: Optional[Request] = None):
        logger.info("User %s has registered.", user.email)

    async def on_after_login(self, user: UserTable, request: Optional[Request] = None, response=None):
        logger.info("User %s logged in.", user.email)


async def get_user_manager(user_db: UserDatabase = Depends(get_user_db)) -> UserManager:
    yield UserManager(user_db)

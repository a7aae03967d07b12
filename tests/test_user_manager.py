import pytest
import pytest_asyncio
from fastapi import Request
from fastapi_users import exceptions

from auth.schemas import UserCreate
from auth.user_manager import UserManager


@pytest_asyncio.fixture
async def user_manager(fake_user_db):
    yield UserManager(fake_user_db)


@pytest.mark.asyncio
async def test_register_creates_user_with_hashed_password(user_manager: UserManager):
    created = await user_manager.create(
        UserCreate(email="new@example.com", password="LongEnough1", username="newbie")
    )

    assert created.email == "new@example.com"
    assert created.username == "newbie"
    assert created.hashed_password != "LongEnough1"
    assert await user_manager.user_db.get_by_email("new@example.com") is created


@pytest.mark.asyncio
async def test_register_rejects_short_password(user_manager: UserManager):
    with pytest.raises(exceptions.InvalidPasswordException):
        await user_manager.create(UserCreate(email="short@example.com", password="abc123"))


@pytest.mark.asyncio
async def test_register_rejects_password_containing_email(user_manager: UserManager):
    with pytest.raises(exceptions.InvalidPasswordException):
        await user_manager.create(UserCreate(email="me@example.com", password="xx-me@example.com"))


@pytest.mark.asyncio
async def test_register_rejects_duplicate_username(user_manager: UserManager):
    await user_manager.create(UserCreate(email="first@example.com", password="Password123", username="taken"))

    with pytest.raises(exceptions.UserAlreadyExists):
        await user_manager.create(UserCreate(email="second@example.com", password="Password123", username="TAKEN"))


@pytest.mark.asyncio
async def test_register_rejects_duplicate_email(user_manager: UserManager):
    await user_manager.create(UserCreate(email="dup@example.com", password="Password123"))

    with pytest.raises(exceptions.UserAlreadyExists):
        await user_manager.create(UserCreate(email="dup@example.com", password="Password456"))


@pytest.mark.asyncio
async def test_on_after_register(user_manager: UserManager):
    created = await user_manager.user_db.create(
        {"email": "hook@example.com", "hashed_password": "secret", "is_verified": True, "is_active": True}
    )

    # Should not raise errors
    await user_manager.on_after_register(created, Request({"type": "http"}))

"""Tests for user_service."""

import hashlib

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas import UserCreate, UserPublic
from app.services import user_service


def _sha256(password: str) -> str:
    return hashlib.sha256(password.encode()).hexdigest()


@pytest.mark.asyncio
async def test_create_user_stores_hashed_credential(test_session: AsyncSession) -> None:
    user = await user_service.create_user(
        test_session,
        UserCreate(username="ada", password="correct horse"),
        hash_password=_sha256,
    )
    assert user.id is not None
    assert user.password == _sha256("correct horse")
    assert user.password != "correct horse"


@pytest.mark.asyncio
async def test_create_user_rejects_identity_hasher(test_session: AsyncSession) -> None:
    with pytest.raises(ValueError, match="unchanged"):
        await user_service.create_user(
            test_session,
            UserCreate(username="ada", password="plain"),
            hash_password=lambda password: password,
        )


@pytest.mark.asyncio
async def test_username_is_unique(test_session: AsyncSession) -> None:
    await user_service.create_user(
        test_session, UserCreate(username="ada", password="a"), hash_password=_sha256
    )
    with pytest.raises(IntegrityError):
        await user_service.create_user(
            test_session, UserCreate(username="ada", password="b"), hash_password=_sha256
        )


@pytest.mark.asyncio
async def test_lookup(test_session: AsyncSession) -> None:
    user = await user_service.create_user(
        test_session, UserCreate(username="grace", password="p"), hash_password=_sha256
    )
    assert (await user_service.get_user(test_session, user.id)).username == "grace"
    assert (await user_service.get_user_by_username(test_session, "grace")).id == user.id
    assert await user_service.get_user_by_username(test_session, "nobody") is None


@pytest.mark.asyncio
async def test_public_view_hides_password(test_session: AsyncSession) -> None:
    user = await user_service.create_user(
        test_session, UserCreate(username="linus", password="p"), hash_password=_sha256
    )
    assert UserPublic.model_validate(user).model_dump(by_alias=True) == {
        "id": user.id,
        "username": "linus",
    }

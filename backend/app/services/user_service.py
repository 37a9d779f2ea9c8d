"""User service for registration and lookup."""

from collections.abc import Callable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.models.user import User
from app.schemas.user import UserCreate

logger = get_logger(__name__)


async def create_user(
    db: AsyncSession,
    data: UserCreate,
    *,
    hash_password: Callable[[str], str],
) -> User:
    """Create a user, storing the credential produced by ``hash_password``.

    Hashing policy belongs to the caller's auth layer; this function only
    refuses a hasher that hands the raw password back.

    Raises:
        ValueError: if ``hash_password`` returned its input unchanged.
        sqlalchemy.exc.IntegrityError: if the username is already taken.
    """
    credential = hash_password(data.password)
    if credential == data.password:
        raise ValueError("hash_password returned the raw password unchanged")

    user = User(username=data.username, password=credential)
    db.add(user)
    await db.flush()

    logger.info("User created", user_id=user.id, username=user.username)
    return user


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    return await db.get(User, user_id)


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()

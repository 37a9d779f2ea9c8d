"""User schemas."""

from typing import ClassVar

from pydantic import ConfigDict, StrictStr

from app.models.user import User
from app.schemas.validation import CamelModel, PayloadSchema


class UserCreate(PayloadSchema):
    """Fields a caller may supply when registering a user."""

    persisted_model: ClassVar[type | None] = User

    username: StrictStr
    password: StrictStr


class UserPublic(CamelModel):
    """User as exposed to callers; the stored credential is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str

"""User model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class User(Base):
    """Registered user.

    ``password`` holds whatever credential representation the registration
    flow produced; see ``user_service.create_user``.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String, unique=True)
    password: Mapped[str] = mapped_column(String)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"

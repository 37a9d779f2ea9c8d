"""Journey map model."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base

DEFAULT_STYLE = "marker"
DEFAULT_COMPLEXITY = "simple"


def utcnow() -> datetime:
    # Naive UTC, matching what SQLite hands back on refresh.
    return datetime.now(UTC).replace(tzinfo=None)


class JourneyMap(Base):
    """A journey map with its embedded elements and connections.

    ``elements`` and ``connections`` are stored as JSON arrays of camelCase
    objects; they have no identity outside the map that owns them.
    """

    __tablename__ = "journey_maps"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String)
    description: Mapped[str] = mapped_column(Text)

    # Presentation
    style: Mapped[str | None] = mapped_column(
        String, default=DEFAULT_STYLE, server_default=DEFAULT_STYLE
    )
    complexity: Mapped[str | None] = mapped_column(
        String, default=DEFAULT_COMPLEXITY, server_default=DEFAULT_COMPLEXITY
    )

    # Embedded values
    elements: Mapped[list[dict[str, Any]]] = mapped_column(JSON)
    connections: Mapped[list[dict[str, Any]]] = mapped_column(JSON)

    # Timestamps
    created_at: Mapped[datetime | None] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow
    )

    # Owner (reference only, no cascade)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"), default=None)

    def __repr__(self) -> str:
        return f"<JourneyMap(id={self.id}, title={self.title})>"

"""Database models."""

from app.models.journey_map import DEFAULT_COMPLEXITY, DEFAULT_STYLE, JourneyMap
from app.models.user import User

__all__ = [
    "User",
    "JourneyMap",
    "DEFAULT_STYLE",
    "DEFAULT_COMPLEXITY",
]

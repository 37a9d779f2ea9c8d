"""Service layer modules."""

from app.services import journey_map_service, user_service

__all__ = [
    "journey_map_service",
    "user_service",
]

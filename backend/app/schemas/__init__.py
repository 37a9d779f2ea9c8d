"""Pydantic schemas."""

from app.schemas.journey_map import (
    Connection,
    Element,
    JourneyMapCreate,
    JourneyMapResponse,
    JourneyMapUpdate,
    Position,
    check_connection_references,
)
from app.schemas.user import UserCreate, UserPublic
from app.schemas.validation import (
    FieldViolation,
    PayloadValidationError,
    ValidationResult,
    ViolationKind,
    validate_payload,
)

__all__ = [
    "UserCreate",
    "UserPublic",
    "Position",
    "Element",
    "Connection",
    "JourneyMapCreate",
    "JourneyMapUpdate",
    "JourneyMapResponse",
    "check_connection_references",
    "FieldViolation",
    "PayloadValidationError",
    "ValidationResult",
    "ViolationKind",
    "validate_payload",
]

"""Payload base classes and structured validation.

Insert and update payloads list their fields explicitly rather than
computing them from the table. Each payload class names the model it feeds
through ``persisted_model`` and is checked against that model's columns when
the class is created, so a field that has no column fails at import.

``validate_payload`` never raises for bad input. It returns a
``ValidationResult`` carrying either the parsed value or a list of
``FieldViolation`` entries keyed by dotted wire path.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import ErrorDetails


class ViolationKind(StrEnum):
    MISSING_FIELD = "missing_field"
    TYPE_MISMATCH = "type_mismatch"
    UNKNOWN_FIELD = "unknown_field"
    INVALID_REFERENCE = "invalid_reference"
    DUPLICATE_ID = "duplicate_id"


class FieldViolation(BaseModel):
    """A single field-level problem found in a payload."""

    kind: ViolationKind
    field: str  # dotted wire path, "" for the payload itself
    message: str


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PayloadSchema(CamelModel):
    """Base for payloads that are written to a persisted model."""

    model_config = ConfigDict(extra="forbid")

    persisted_model: ClassVar[type | None] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if cls.persisted_model is None:
            return
        columns = set(cls.persisted_model.__table__.columns.keys())
        stray = sorted(set(cls.model_fields) - columns)
        if stray:
            raise TypeError(
                f"{cls.__name__} declares fields with no column on "
                f"{cls.persisted_model.__name__}: {', '.join(stray)}"
            )

    @classmethod
    def wire_name(cls, name: str) -> str:
        return cls.model_fields[name].alias or name

    def consistency_violations(self) -> list[FieldViolation]:
        """Cross-field checks, run once every field has the right type."""
        return []


ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    value: ModelT | None = None
    violations: list[FieldViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


class PayloadValidationError(ValueError):
    """Raised by the service layer when a payload cannot be stored."""

    def __init__(self, violations: Iterable[FieldViolation]):
        self.violations = list(violations)
        super().__init__(
            "; ".join(f"{v.field or '<payload>'}: {v.message}" for v in self.violations)
        )


_KIND_BY_ERROR_TYPE = {
    "missing": ViolationKind.MISSING_FIELD,
    "extra_forbidden": ViolationKind.UNKNOWN_FIELD,
}


def format_location(loc: Iterable[int | str]) -> str:
    return ".".join(str(part) for part in loc)


def _violation_from_error(error: ErrorDetails, prefix: tuple[int | str, ...]) -> FieldViolation:
    return FieldViolation(
        kind=_KIND_BY_ERROR_TYPE.get(error["type"], ViolationKind.TYPE_MISMATCH),
        field=format_location((*prefix, *error["loc"])),
        message=error["msg"],
    )


def violations_from_error(
    exc: ValidationError, prefix: tuple[int | str, ...] = ()
) -> list[FieldViolation]:
    """Flatten a pydantic error, optionally nesting its paths under ``prefix``."""
    return [_violation_from_error(error, prefix) for error in exc.errors()]


def validate_payload(schema: type[ModelT], payload: Any) -> ValidationResult[ModelT]:
    """Validate ``payload`` against ``schema`` without raising.

    Values are never coerced across types: a numeric string is not a number
    and a number is not a string.
    """
    try:
        value = schema.model_validate(payload)
    except ValidationError as exc:
        return ValidationResult(violations=violations_from_error(exc))

    if isinstance(value, PayloadSchema):
        violations = value.consistency_violations()
        if violations:
            return ValidationResult(violations=violations)
    return ValidationResult(value=value)

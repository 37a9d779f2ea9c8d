"""Journey map schemas: embedded values, payloads and responses."""

from collections.abc import Sequence
from datetime import datetime
from typing import Annotated, ClassVar

from pydantic import ConfigDict, Field, StrictInt, StrictStr

from app.models.journey_map import JourneyMap
from app.schemas.validation import CamelModel, FieldViolation, PayloadSchema, ViolationKind

# Any finite int or float; bools and numeric strings are rejected.
FiniteNumber = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class Position(CamelModel):
    x: FiniteNumber
    y: FiniteNumber


class Element(CamelModel):
    """A box on the journey map canvas."""

    id: StrictStr
    title: StrictStr
    description: StrictStr
    position: Position
    width: FiniteNumber
    height: FiniteNumber
    color: StrictStr | None = None
    category: StrictStr | None = None
    duration: FiniteNumber | None = None
    duration_unit: StrictStr | None = None
    notes: StrictStr | None = None


class Connection(CamelModel):
    """A directed link between two elements of the same map."""

    id: StrictStr
    source_id: StrictStr
    target_id: StrictStr


def dump_embedded(values: Sequence[Element | Connection]) -> list[dict]:
    """Serialize embedded values the way they are stored in JSON columns."""
    return [value.model_dump(by_alias=True, exclude_none=True) for value in values]


def check_connection_references(
    elements: Sequence[Element],
    connections: Sequence[Connection],
) -> list[FieldViolation]:
    """Report repeated element ids and connections to unknown elements.

    Element ids are checked here too: with a repeated id a connection endpoint
    would name two elements, so uniqueness is enforced alongside references
    rather than left to the caller.
    """
    violations: list[FieldViolation] = []

    known: set[str] = set()
    for index, element in enumerate(elements):
        if element.id in known:
            violations.append(
                FieldViolation(
                    kind=ViolationKind.DUPLICATE_ID,
                    field=f"elements.{index}.id",
                    message=f"Element id {element.id!r} is already used in this map",
                )
            )
        known.add(element.id)

    for index, connection in enumerate(connections):
        for attr in ("source_id", "target_id"):
            ref = getattr(connection, attr)
            if ref not in known:
                violations.append(
                    FieldViolation(
                        kind=ViolationKind.INVALID_REFERENCE,
                        field=f"connections.{index}.{Connection.model_fields[attr].alias}",
                        message=f"No element with id {ref!r} in this map",
                    )
                )
    return violations


class JourneyMapCreate(PayloadSchema):
    """Fields a caller may supply when creating a journey map."""

    persisted_model: ClassVar[type | None] = JourneyMap

    title: StrictStr
    description: StrictStr
    style: StrictStr | None = None
    complexity: StrictStr | None = None
    elements: list[Element]
    connections: list[Connection]
    user_id: StrictInt | None = None

    def consistency_violations(self) -> list[FieldViolation]:
        return check_connection_references(self.elements, self.connections)


class JourneyMapUpdate(PayloadSchema):
    """Partial update; only the fields present in the payload are applied."""

    persisted_model: ClassVar[type | None] = JourneyMap

    NOT_NULL_FIELDS: ClassVar[tuple[str, ...]] = (
        "title",
        "description",
        "elements",
        "connections",
    )

    title: StrictStr | None = None
    description: StrictStr | None = None
    style: StrictStr | None = None
    complexity: StrictStr | None = None
    elements: list[Element] | None = None
    connections: list[Connection] | None = None
    user_id: StrictInt | None = None

    def consistency_violations(self) -> list[FieldViolation]:
        violations = [
            FieldViolation(
                kind=ViolationKind.TYPE_MISMATCH,
                field=self.wire_name(name),
                message="Field cannot be null",
            )
            for name in self.NOT_NULL_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if violations:
            return violations
        if self.elements is not None and self.connections is not None:
            return check_connection_references(self.elements, self.connections)
        return []


class JourneyMapResponse(CamelModel):
    """Journey map response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    style: str | None
    complexity: str | None
    elements: list[Element]
    connections: list[Connection]
    created_at: datetime | None
    updated_at: datetime | None
    user_id: int | None

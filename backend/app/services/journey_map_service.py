"""Journey map service for CRUD operations.

Functions here flush but never commit; the caller's session scope (for
example ``get_db_session``) owns the transaction.
"""

from pydantic import ValidationError
from sqlalchemy import null, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.models.journey_map import JourneyMap
from app.schemas.journey_map import (
    Connection,
    Element,
    JourneyMapCreate,
    JourneyMapUpdate,
    check_connection_references,
    dump_embedded,
)
from app.schemas.validation import (
    FieldViolation,
    PayloadValidationError,
    violations_from_error,
)

logger = get_logger(__name__)


def _load_stored(schema, rows: list[dict], field: str) -> list:
    """Parse embedded values read back from a JSON column."""
    values = []
    violations: list[FieldViolation] = []
    for index, row in enumerate(rows):
        try:
            values.append(schema.model_validate(row))
        except ValidationError as exc:
            violations.extend(violations_from_error(exc, (field, index)))
    if violations:
        raise PayloadValidationError(violations)
    return values


async def create_journey_map(db: AsyncSession, data: JourneyMapCreate) -> JourneyMap:
    """Create a journey map from a validated payload.

    Omitted ``style``/``complexity`` fall back to the column defaults; an
    explicit ``None`` is written as NULL.

    Raises:
        PayloadValidationError: if a connection points at an unknown element
            or an element id repeats.
    """
    violations = data.consistency_violations()
    if violations:
        raise PayloadValidationError(violations)

    columns = {
        # A bare None would be replaced by the column default on insert.
        name: null() if value is None else value
        for name, value in data.model_dump(
            exclude_unset=True, exclude={"elements", "connections"}
        ).items()
    }
    journey_map = JourneyMap(
        **columns,
        elements=dump_embedded(data.elements),
        connections=dump_embedded(data.connections),
    )
    db.add(journey_map)
    await db.flush()
    await db.refresh(journey_map)

    logger.info(
        "Journey map created",
        journey_map_id=journey_map.id,
        user_id=journey_map.user_id,
        elements=len(journey_map.elements),
        connections=len(journey_map.connections),
    )
    return journey_map


async def get_journey_map(db: AsyncSession, journey_map_id: int) -> JourneyMap | None:
    return await db.get(JourneyMap, journey_map_id)


async def list_user_journey_maps(db: AsyncSession, user_id: int) -> list[JourneyMap]:
    """List a user's journey maps, most recently updated first."""
    result = await db.execute(
        select(JourneyMap)
        .where(JourneyMap.user_id == user_id)
        .order_by(JourneyMap.updated_at.desc(), JourneyMap.id.desc())
    )
    return list(result.scalars().all())


async def update_journey_map(
    db: AsyncSession,
    journey_map_id: int,
    data: JourneyMapUpdate,
) -> JourneyMap | None:
    """Apply the fields present in ``data`` to a stored journey map.

    References are checked against the merged map, so replacing only
    ``connections`` is validated against the elements already stored.

    Returns:
        Updated journey map, or None if it does not exist

    Raises:
        PayloadValidationError: if the merged map is inconsistent. Stored
            elements or connections that no longer parse are reported the
            same way, under their stored path.
    """
    journey_map = await db.get(JourneyMap, journey_map_id)
    if not journey_map:
        return None

    fields_set = data.model_fields_set
    elements = (
        data.elements
        if "elements" in fields_set and data.elements is not None
        else _load_stored(Element, journey_map.elements, "elements")
    )
    connections = (
        data.connections
        if "connections" in fields_set and data.connections is not None
        else _load_stored(Connection, journey_map.connections, "connections")
    )
    violations = data.consistency_violations() or check_connection_references(
        elements, connections
    )
    if violations:
        logger.warning(
            "Journey map update rejected",
            journey_map_id=journey_map_id,
            violations=[v.field for v in violations],
        )
        raise PayloadValidationError(violations)

    for name, value in data.model_dump(
        exclude_unset=True, exclude={"elements", "connections"}
    ).items():
        setattr(journey_map, name, value)
    if "elements" in fields_set:
        journey_map.elements = dump_embedded(elements)
    if "connections" in fields_set:
        journey_map.connections = dump_embedded(connections)

    await db.flush()
    await db.refresh(journey_map)

    logger.info(
        "Journey map updated",
        journey_map_id=journey_map_id,
        fields=sorted(fields_set),
    )
    return journey_map


async def delete_journey_map(db: AsyncSession, journey_map_id: int) -> bool:
    """Delete a journey map. Returns False if it does not exist."""
    journey_map = await db.get(JourneyMap, journey_map_id)
    if not journey_map:
        return False

    await db.delete(journey_map)
    await db.flush()

    logger.info("Journey map deleted", journey_map_id=journey_map_id)
    return True

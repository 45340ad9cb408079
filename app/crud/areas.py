import uuid
from typing import Any, List, Optional, Sequence, Tuple

from fastapi.logger import logger
from sqlalchemy import and_

from ..application import db
from ..errors import RecordNotFoundError
from ..models.enum.areas import AreaStatus
from ..models.orm.areas import Area as ORMArea
from ..utils.filters import AreaFilter
from . import update_data

# Fields which can be checked for an already resolved sibling area
GEOSTORE_FIELDS = ("geostore", "geostore_data_api")


def _filter_clause(area_filter: AreaFilter):
    clauses = [ORMArea.env.in_(area_filter.env)]
    if area_filter.user_id is not None:
        clauses.append(ORMArea.user_id == area_filter.user_id)
    if area_filter.application:
        clauses.append(ORMArea.application.in_(area_filter.application))
    if area_filter.status is not None:
        clauses.append(ORMArea.status == area_filter.status)
    if area_filter.public is not None:
        clauses.append(ORMArea.public == area_filter.public)
    return and_(*clauses)


def _order_by(sort: Sequence[Tuple[str, bool]]) -> List[Any]:
    columns = list()
    for field, descending in sort:
        column = getattr(ORMArea, field)
        columns.append(column.desc() if descending else column.asc())
    return columns


def _saved_area_clause(
    field: str, value: str, exclude_id: Optional[uuid.UUID] = None
):
    assert field in GEOSTORE_FIELDS, f"Cannot look up saved areas by {field}"

    column = getattr(ORMArea, field)
    clause = and_(column == value, ORMArea.status == AreaStatus.saved.value)
    if exclude_id is not None:
        clause = and_(clause, ORMArea.id != exclude_id)
    return clause


def _row_count(status: str) -> int:
    """Number of affected rows from a command status like `UPDATE 3`."""
    return int(status.split()[-1])


async def count_areas(area_filter: AreaFilter) -> int:
    """Get count of all areas matching the filter."""

    total_areas = (
        await db.select([db.func.count(ORMArea.id)])
        .where(_filter_clause(area_filter))
        .gino.scalar()
    )
    return total_areas


async def get_areas(
    area_filter: AreaFilter,
    size: Optional[int] = None,
    offset: int = 0,
    sort: Sequence[Tuple[str, bool]] = (("id", False),),
) -> List[ORMArea]:
    """Get one page of areas matching the filter."""

    query = (
        ORMArea.query.where(_filter_clause(area_filter))
        .order_by(*_order_by(sort))
        .offset(offset)
    )
    if size is not None:
        query = query.limit(size)

    return await query.gino.all()


async def get_areas_by_geostores(geostores: List[str]) -> List[ORMArea]:
    rows = await ORMArea.query.where(ORMArea.geostore.in_(geostores)).gino.all()
    return rows


async def get_area(area_id: uuid.UUID) -> ORMArea:
    row: ORMArea = await ORMArea.get([area_id])
    if row is None:
        raise RecordNotFoundError(f"Area with id {area_id} does not exist")

    return row


async def create_area(**data) -> ORMArea:
    new_area: ORMArea = await ORMArea.create(id=uuid.uuid4(), **data)

    return new_area


async def update_area(area_id: uuid.UUID, **data) -> ORMArea:
    row: ORMArea = await get_area(area_id)
    return await update_data(row, data)


async def update_areas_by_geostores(geostores: List[str], **data) -> int:
    """Apply the same change set to all areas of the given geostores.

    Returns the number of updated rows.
    """
    status, _ = (
        await ORMArea.update.values(**data)
        .where(ORMArea.geostore.in_(geostores))
        .gino.status()
    )
    logger.debug(f"Bulk update finished with status {status}")
    return _row_count(status)


async def delete_area(area_id: uuid.UUID) -> ORMArea:
    row: ORMArea = await get_area(area_id)
    await ORMArea.delete.where(ORMArea.id == area_id).gino.status()

    return row


async def exists_saved_area(
    field: str, value: str, exclude_id: Optional[uuid.UUID] = None
) -> bool:
    """Check if any other area pointing to the same geostore was already
    saved."""

    clause = _saved_area_clause(field, value, exclude_id)
    area_id = await db.select([ORMArea.id]).where(clause).limit(1).gino.scalar()
    return area_id is not None

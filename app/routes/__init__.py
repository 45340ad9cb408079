from contextlib import contextmanager
from typing import Dict, Iterator, Type
from uuid import UUID

from fastapi import HTTPException, Path

from ..errors import (
    ForbiddenError,
    RecordNotFoundError,
    UnauthorizedError,
)

# Domain errors and the status code they are reported with
ERROR_STATUS_CODES: Dict[Type[Exception], int] = {
    UnauthorizedError: 401,
    ForbiddenError: 403,
    RecordNotFoundError: 404,
}


async def area_dependency(area_id: str = Path(..., title="Area id")) -> UUID:
    """Ids which are no valid UUIDs cannot exist."""
    try:
        return UUID(area_id)
    except ValueError:
        raise HTTPException(
            status_code=404, detail=f"Area with id {area_id} does not exist"
        )


@contextmanager
def http_errors() -> Iterator[None]:
    """Report domain errors raised within the block as HTTP errors."""
    try:
        yield
    except tuple(ERROR_STATUS_CODES.keys()) as e:
        raise HTTPException(status_code=ERROR_STATUS_CODES[type(e)], detail=str(e))

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response
from fastapi.responses import ORJSONResponse

from ...authentication.token import get_user, get_user_or_none
from ...models.pydantic.areas import AreaResponse, AreaUpdateIn
from ...models.pydantic.authentication import User
from ...services.areas import AreaService
from .. import area_dependency, http_errors
from . import area_response, area_service

router = APIRouter()


@router.get(
    "/{area_id}",
    response_class=ORJSONResponse,
    tags=["Areas"],
    response_model=AreaResponse,
)
async def get_area(
    *,
    area_id: UUID = Depends(area_dependency),
    user: Optional[User] = Depends(get_user_or_none),
    service: AreaService = Depends(area_service),
) -> AreaResponse:
    """Get a single area.

    Private areas are only visible to their owner and to admins. Other
    users see public areas without owner specific fields.
    """

    with http_errors():
        area = await service.get_area(area_id, user)

    return area_response(area)


@router.patch(
    "/{area_id}",
    response_class=ORJSONResponse,
    tags=["Areas"],
    response_model=AreaResponse,
)
async def update_area(
    *,
    area_id: UUID = Depends(area_dependency),
    request: AreaUpdateIn,
    user: User = Depends(get_user),
    service: AreaService = Depends(area_service),
) -> AreaResponse:
    """Partially update an area.

    Only fields sent in the request are changed, fields explicitly set to
    `null` are cleared where possible. Changing the geostore recomputes
    the status of the area.
    """

    with http_errors():
        area = await service.update_area(area_id, request, user)

    return area_response(area)


@router.delete("/{area_id}", tags=["Areas"], status_code=204)
async def delete_area(
    *,
    area_id: UUID = Depends(area_dependency),
    user: User = Depends(get_user),
    service: AreaService = Depends(area_service),
) -> Response:
    """Delete an area.

    Only the owner of the area or an admin can delete it.
    """

    with http_errors():
        await service.delete_area(area_id, user)

    return Response(status_code=204)

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import ORJSONResponse

from ...authentication.token import get_user
from ...models.pydantic.areas import (
    AreaCreateIn,
    AreaResponse,
    AreasResponse,
    AreaUpdateByGeostoreIn,
    PaginatedAreasResponse,
)
from ...models.pydantic.authentication import User
from ...services.areas import AreaService
from ...settings.globals import API_PREFIX
from ...utils.filters import RawQuery
from ...utils.paginate import host_for_pagination_link, pagination_link_base
from .. import http_errors
from . import area_response, area_service, areas_response, paginated_areas_response

router = APIRouter()


def _link_base(request: Request, query: RawQuery) -> str:
    path: str = request.url.path
    if API_PREFIX and path.startswith(API_PREFIX):
        path = path[len(API_PREFIX) :]

    host = host_for_pagination_link(
        request.headers, request.headers.get("host", request.url.netloc)
    )
    return pagination_link_base(request.url.scheme, host, API_PREFIX, path, query)


@router.get(
    "",
    response_class=ORJSONResponse,
    tags=["Areas"],
    response_model=PaginatedAreasResponse,
)
async def get_areas(
    *,
    request: Request,
    sort: Optional[str] = Query(
        None,
        description="Comma separated list of fields to order by. "
        "Prefix a field with `-` for descending order.",
    ),
    page_number: Optional[int] = Query(
        default=None, alias="page[number]", ge=1, description="The page number."
    ),
    page_size: Optional[int] = Query(
        default=None,
        alias="page[size]",
        ge=1,
        description="The number of areas per page. Default is `300`.",
    ),
    user: User = Depends(get_user),
    service: AreaService = Depends(area_service),
) -> PaginatedAreasResponse:
    """List the areas of the current user.

    Admins can list the areas of all users with `all=true`. Areas can be
    filtered by `application` and `env` (comma separated lists), `status`
    and `public`. Only areas of env `production` are listed unless
    another env is requested.
    """

    query: RawQuery = {
        key: request.query_params.getlist(key) for key in request.query_params.keys()
    }

    with http_errors():
        data, links, meta = await service.list_areas(
            user,
            query,
            _link_base(request, query),
            sort=sort,
            page=page_number,
            size=page_size,
        )

    return paginated_areas_response(data, links, meta)


@router.post(
    "",
    response_class=ORJSONResponse,
    tags=["Areas"],
    response_model=AreaResponse,
    status_code=201,
)
async def create_area(
    *,
    request: AreaCreateIn,
    user: User = Depends(get_user),
    service: AreaService = Depends(area_service),
) -> AreaResponse:
    """Create an area for the current user.

    Either `geostore` or `geostoreDataApi` can reference the geometry of
    the area, not both. If a `mapStyle` is sent along with a `geostore`
    a thumbnail of the area is rendered. The status of the area is
    computed, only admins can set it directly.
    """

    with http_errors():
        area = await service.create_area(request, user)

    return area_response(area)


@router.post(
    "/update",
    response_class=ORJSONResponse,
    tags=["Areas"],
    response_model=AreasResponse,
)
async def update_areas_by_geostore(
    *,
    request: AreaUpdateByGeostoreIn,
    user: User = Depends(get_user),
    service: AreaService = Depends(area_service),
) -> AreasResponse:
    """Apply the same update to all areas using one of the given geostores.

    Saved areas with an email address are notified. This operation
    requires an `ADMIN` user role.
    """

    with http_errors():
        areas: List = await service.update_areas_by_geostore(request, user)

    return areas_response(areas)

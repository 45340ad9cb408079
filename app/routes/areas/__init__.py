"""Areas are user defined regions of interest, used to monitor forest
change and to subscribe to alerts."""
from typing import List

from fastapi import BackgroundTasks

from ...models.pydantic.areas import (
    Area,
    AreaResponse,
    AreasResponse,
    PaginatedAreasResponse,
)
from ...models.pydantic.responses import PaginationLinks, PaginationMeta
from ...services.areas import AreaService
from ...settings.globals import (
    CREATE_APPLICATION,
    DEFAULT_APPLICATION,
    DEFAULT_ENV,
    DEFAULT_LANG_CODE,
    DEFAULT_PAGE_SIZE,
    FLAGSHIP_URL,
    SUPPORTED_LANG_CODES,
)


async def area_service(background_tasks: BackgroundTasks) -> AreaService:
    """Area service of the current request.

    Notifications are sent once the response went out.
    """
    return AreaService(
        background_tasks=background_tasks,
        flagship_url=FLAGSHIP_URL,
        create_application=CREATE_APPLICATION,
        default_application=DEFAULT_APPLICATION,
        default_env=DEFAULT_ENV,
        page_size=DEFAULT_PAGE_SIZE,
        supported_languages=tuple(SUPPORTED_LANG_CODES),
        default_language=DEFAULT_LANG_CODE,
    )


def area_response(area: Area) -> AreaResponse:
    return AreaResponse(data=area)


def areas_response(areas: List[Area]) -> AreasResponse:
    return AreasResponse(data=areas)


def paginated_areas_response(
    areas: List[Area], links: PaginationLinks, meta: PaginationMeta
) -> PaginatedAreasResponse:
    return PaginatedAreasResponse(data=areas, links=links, meta=meta)

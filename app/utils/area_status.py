from typing import Any, NamedTuple, Optional
from uuid import UUID

from fastapi.logger import logger

from ..models.enum.areas import AreaStatus
from ..models.pydantic.areas import AreaAdmin, AreaIso


class StatusResolution(NamedTuple):
    status: AreaStatus
    is_saved: bool


SAVED = StatusResolution(AreaStatus.saved, True)
PENDING = StatusResolution(AreaStatus.pending, False)


def has_independent_geometry(
    iso: Optional[AreaIso], admin: Optional[AreaAdmin], wdpaid: Optional[Any]
) -> bool:
    """Countries, regions, admin level 0 boundaries and protected areas are
    resolvable without waiting for a custom geometry to be processed.

    adm1 or adm2 without adm0 do not count.
    """
    if iso is not None and (iso.country or iso.region):
        return True
    if admin is not None and admin.adm0:
        return True
    return bool(wdpaid)


async def resolve_status(
    repository: Any,
    geostore: Optional[str] = None,
    geostore_data_api: Optional[str] = None,
    iso: Optional[AreaIso] = None,
    admin: Optional[AreaAdmin] = None,
    wdpaid: Optional[Any] = None,
    exclude_id: Optional[UUID] = None,
) -> StatusResolution:
    """Decide whether an area is ready to use.

    An area is saved if it has an independently resolvable geometry or if
    another saved area already points to the same geostore. `exclude_id`
    keeps the area itself out of the sibling lookup.
    """

    if has_independent_geometry(iso, admin, wdpaid):
        return SAVED

    if geostore:
        logger.info(f"Checking if data created already for geostore {geostore}")
        if await repository.exists_saved_area("geostore", geostore, exclude_id):
            return SAVED

    elif geostore_data_api:
        logger.info(
            f"Checking if data created already for geostoreDataApi {geostore_data_api}"
        )
        if await repository.exists_saved_area(
            "geostore_data_api", geostore_data_api, exclude_id
        ):
            return SAVED

    return PENDING

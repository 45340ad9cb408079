"""Area lifecycle.

The service composes access control, filter and status resolution with
the area repository and decides when a notification goes out. It does not
know about HTTP, routes translate its errors into responses.
"""
import logging
from asyncio import gather
from datetime import datetime
from functools import partial
from types import ModuleType
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from fastapi import BackgroundTasks
from fastapi.logger import logger
from pydantic import BaseModel

from ..authentication.access_control import (
    area_view,
    can_set_status,
    ensure_admin,
    ensure_can_write,
    ensure_user,
)
from ..crud import areas as areas_repository
from ..errors import UpstreamDependencyError
from ..models.enum.areas import AreaStatus, NotificationTemplate
from ..models.pydantic.areas import (
    Area,
    AreaCreateIn,
    AreaUpdateByGeostoreIn,
    AreaUpdateIn,
)
from ..models.pydantic.authentication import User
from ..models.pydantic.responses import PaginationLinks, PaginationMeta
from ..settings.globals import (
    CREATE_APPLICATION,
    DEFAULT_APPLICATION,
    DEFAULT_ENV,
    DEFAULT_LANG_CODE,
    DEFAULT_PAGE_SIZE,
    FLAGSHIP_URL,
    SUPPORTED_LANG_CODES,
)
from ..utils.area_status import resolve_status
from ..utils.aws import upload_image
from ..utils.filters import RawQuery, build_area_filter, build_sort
from ..utils.mail import send_mail
from ..utils.mbgl import get_image_from_style
from ..utils.paginate import paginate_collection

Notifier = Callable[[str, Dict[str, Any], List[Dict[str, str]], str], Awaitable[None]]
Renderer = Callable[[Dict[str, Any]], Awaitable[bytes]]
BlobStore = Callable[[bytes, str], Awaitable[str]]

# Plain attributes copied as they are when present in an update
UPDATABLE_FIELDS = (
    "name",
    "wdpaid",
    "tags",
    "datasets",
    "public",
    "webhook_url",
    "env",
    "subscription_id",
    "email",
    "template_id",
)
COMPOSITE_FIELDS = ("use", "iso", "admin")


def _object(value: Optional[BaseModel]) -> Dict[str, Any]:
    return value.model_dump() if value is not None else {}


class AreaService:
    def __init__(
        self,
        repository: ModuleType = areas_repository,
        notifier: Notifier = send_mail,
        renderer: Renderer = get_image_from_style,
        blob_store: BlobStore = upload_image,
        background_tasks: Optional[BackgroundTasks] = None,
        flagship_url: str = FLAGSHIP_URL,
        create_application: str = CREATE_APPLICATION,
        default_application: str = DEFAULT_APPLICATION,
        default_env: str = DEFAULT_ENV,
        page_size: int = DEFAULT_PAGE_SIZE,
        supported_languages: Sequence[str] = tuple(SUPPORTED_LANG_CODES),
        default_language: str = DEFAULT_LANG_CODE,
        log: logging.Logger = logger,
    ):
        self.repository = repository
        self.notifier = notifier
        self.renderer = renderer
        self.blob_store = blob_store
        self.background_tasks = background_tasks
        self.flagship_url = flagship_url
        self.create_application = create_application
        self.default_application = default_application
        self.default_env = default_env
        self.page_size = page_size
        self.supported_languages = supported_languages
        self.default_language = default_language
        self.log = log

    async def list_areas(
        self,
        user: Optional[User],
        query: RawQuery,
        link_base: str,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
    ) -> Tuple[List[Area], PaginationLinks, PaginationMeta]:
        """Get one page of the areas visible to the caller."""

        user = ensure_user(user)
        area_filter = build_area_filter(user, query)
        order = build_sort(sort)
        self.log.info(f"Obtaining areas of user {user.id} with filter {area_filter}")

        rows, links, meta = await paginate_collection(
            paged_items_fn=partial(self.repository.get_areas, area_filter, sort=order),
            item_count_fn=partial(self.repository.count_areas, area_filter),
            link_base=link_base,
            size=size or self.page_size,
            page=page,
        )
        return [self._area(row) for row in rows], links, meta

    async def get_area(self, area_id: UUID, user: Optional[User]) -> Area:
        row = await self.repository.get_area(area_id)
        return area_view(user, self._area(row))

    async def create_area(self, payload: AreaCreateIn, user: Optional[User]) -> Area:
        user = ensure_user(user)
        self.log.info(f"Saving area for user {user.id}")

        image = ""
        if payload.geostore and payload.map_style:
            image = await self._render_image(payload.geostore, payload.map_style)

        resolution = await resolve_status(
            self.repository,
            geostore=payload.geostore,
            geostore_data_api=payload.geostore_data_api,
            iso=payload.iso,
            admin=payload.admin,
            wdpaid=payload.wdpaid,
        )
        status = resolution.status
        if payload.status is not None and can_set_status(user):
            status = payload.status

        data = dict(
            name=payload.name,
            application=payload.application or self.create_application,
            geostore=payload.geostore,
            geostore_data_api=payload.geostore_data_api,
            wdpaid=payload.wdpaid or None,
            user_id=user.id,
            use=_object(payload.use),
            env=payload.env or self.default_env,
            iso=_object(payload.iso),
            admin=_object(payload.admin),
            datasets=payload.datasets or [],
            image=image,
            tags=payload.tags or [],
            status=status.value,
            public=bool(payload.public),
            webhook_url=payload.webhook_url or "",
            email=payload.email or "",
            subscription_id=payload.subscription_id,
            language=self._language(payload.language),
            template_id=payload.template_id,
        )
        self.log.debug(f"Creating area with the following data: {data}")

        area = self._area(await self.repository.create_area(**data))

        if area.email:
            await self._dispatch(
                self._notify, NotificationTemplate.dashboard_complete, area
            )
        return area

    async def update_area(
        self, area_id: UUID, payload: AreaUpdateIn, user: Optional[User]
    ) -> Area:
        """Apply the fields present in the payload to the area."""

        area = self._area(await self.repository.get_area(area_id))
        user = ensure_can_write(user, area, payload.user_id)

        changes = await self._changes(area, payload, user)
        self.log.debug(f"Updating area {area_id} with {changes}")

        area = self._area(await self.repository.update_area(area_id, **changes))

        if area.email and area.status == AreaStatus.saved:
            await self._dispatch(
                self._notify, NotificationTemplate.preference_change, area
            )
        return area

    async def delete_area(self, area_id: UUID, user: Optional[User]) -> None:
        area = self._area(await self.repository.get_area(area_id))
        ensure_can_write(user, area)

        await self.repository.delete_area(area_id)
        self.log.info(f"Area {area_id} deleted")

    async def update_areas_by_geostore(
        self, request: AreaUpdateByGeostoreIn, user: Optional[User]
    ) -> List[Area]:
        """Apply the same change set to all areas pointing to any of the
        geostores.

        Saved areas with an email are notified once the update is done.
        """

        ensure_admin(user)

        params = request.update_params
        changes: Dict[str, Any] = {
            field: getattr(params, field) for field in params.model_fields_set
        }
        if "status" in changes:
            changes["status"] = params.status.value
        if "language" in changes:
            changes["language"] = self._language(params.language)
        changes["updated_at"] = datetime.utcnow()

        self.log.info(f"Updating areas of geostores {request.geostores}")
        count = await self.repository.update_areas_by_geostores(
            request.geostores, **changes
        )
        self.log.info(f"Updated {count} areas")

        rows = await self.repository.get_areas_by_geostores(request.geostores)
        areas = [self._area(row) for row in rows]

        saved = [area for area in areas if area.status == AreaStatus.saved]
        if saved:
            await self._dispatch(
                self._notify_all, NotificationTemplate.dashboard_complete, saved
            )
        return areas

    def email_parameters(self, area: Area) -> Dict[str, Any]:
        lang = area.language or self.default_language
        return {
            "id": str(area.id),
            "name": area.name,
            "tags": ", ".join(area.tags) if area.tags else "",
            "image_url": area.image,
            "location": area.name,
            "subscriptions_url": f"{self.flagship_url}/my-hw?lang={lang}",
            "dashboard_link": f"{self.flagship_url}/dashboards/aoi/{area.id}?lang={lang}",
            "map_link": f"{self.flagship_url}/map/aoi/{area.id}?lang={lang}",
        }

    async def _changes(
        self, area: Area, payload: AreaUpdateIn, user: User
    ) -> Dict[str, Any]:
        fields = payload.model_fields_set
        changes: Dict[str, Any] = dict()

        if "application" in fields:
            changes["application"] = payload.application
        elif not area.application:
            changes["application"] = self.default_application

        for field in UPDATABLE_FIELDS:
            if field in fields:
                changes[field] = getattr(payload, field)
        for field in COMPOSITE_FIELDS:
            if field in fields:
                changes[field] = _object(getattr(payload, field))

        if "language" in fields:
            changes["language"] = self._language(payload.language)

        if fields & {"geostore", "geostore_data_api"}:
            geostore = payload.geostore if "geostore" in fields else area.geostore
            geostore_data_api = (
                payload.geostore_data_api
                if "geostore_data_api" in fields
                else area.geostore_data_api
            )
            # Setting one geometry reference drops the other
            if payload.geostore:
                geostore_data_api = None
            if payload.geostore_data_api:
                geostore = None
            changes["geostore"] = geostore
            changes["geostore_data_api"] = geostore_data_api

            resolution = await resolve_status(
                self.repository,
                geostore=geostore,
                geostore_data_api=geostore_data_api,
                iso=payload.iso if "iso" in fields else area.iso,
                admin=payload.admin if "admin" in fields else area.admin,
                wdpaid=payload.wdpaid if "wdpaid" in fields else area.wdpaid,
                exclude_id=area.id,
            )
            changes["status"] = resolution.status.value
            self.log.info(
                f"Status of area {area.id} resolved to {resolution.status.value}"
            )

        if payload.status is not None and can_set_status(user):
            changes["status"] = payload.status.value

        changes["updated_at"] = datetime.utcnow()
        return changes

    async def _render_image(self, geostore: str, map_style: Dict[str, Any]) -> str:
        try:
            image = await self.renderer(map_style)
            return await self.blob_store(image, f"{geostore}.png")
        except UpstreamDependencyError as e:
            self.log.warning(f"Could not create image for geostore {geostore}: {e}")
            return ""

    async def _dispatch(self, fn: Callable[..., Awaitable[None]], *args) -> None:
        """Run after the response was sent when inside a request, right away
        otherwise."""
        if self.background_tasks is not None:
            self.background_tasks.add_task(fn, *args)
        else:
            await fn(*args)

    async def _notify(self, template: NotificationTemplate, area: Area) -> None:
        if not area.email:
            return

        lang = area.language or self.default_language
        try:
            await self.notifier(
                f"{template.value}-{lang}",
                self.email_parameters(area),
                [{"address": area.email}],
                area.application,
            )
        except UpstreamDependencyError as e:
            self.log.error(f"Could not notify {template.value} for area {area.id}: {e}")

    async def _notify_all(
        self, template: NotificationTemplate, areas: List[Area]
    ) -> None:
        await gather(*[self._notify(template, area) for area in areas])

    def _language(self, language: Optional[str]) -> str:
        if language and language in self.supported_languages:
            return language
        return self.default_language

    @staticmethod
    def _area(row: Any) -> Area:
        return Area.model_validate(row)

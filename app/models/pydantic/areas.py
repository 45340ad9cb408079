import json
import re
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Tuple, Union
from uuid import UUID

from pydantic import ConfigDict, Field, StrictBool, field_validator, model_validator

from ..enum.areas import AreaStatus
from .base import BaseRecord, CamelCaseModel, StrictBaseModel
from .responses import PaginationLinks, PaginationMeta, Response

HEX_REGEX = re.compile(r"[0-9a-fA-F]+")
TAG_REGEX = re.compile(r"[a-zA-Z0-9À-ɏḀ-ỿ_ ]*")

MUTUALLY_EXCLUSIVE_GEOSTORES = (
    "geostore and geostoreDataApi are mutually exclusive, "
    "cannot provide both at the same time"
)

NonEmptyStr = Annotated[str, Field(min_length=1)]
Identifier = Union[int, str]


def _unwrap_json(value: Any) -> Any:
    """Form encoded requests send nested objects as JSON strings."""
    if isinstance(value, str) and len(value) > 0:
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


class AreaUse(CamelCaseModel):
    id: Optional[Identifier] = None
    name: Optional[str] = None


class AreaIso(CamelCaseModel):
    country: Optional[str] = None
    region: Optional[Identifier] = None


class AreaAdmin(CamelCaseModel):
    adm0: Optional[str] = None
    adm1: Optional[Identifier] = None
    adm2: Optional[Identifier] = None


class Area(BaseRecord):
    id: UUID
    name: Optional[str] = None
    application: Optional[str] = None
    geostore: Optional[str] = None
    geostore_data_api: Optional[str] = None
    wdpaid: Optional[int] = None
    user_id: Optional[str] = None
    use: AreaUse = Field(default_factory=AreaUse)
    env: Optional[str] = None
    iso: AreaIso = Field(default_factory=AreaIso)
    admin: AreaAdmin = Field(default_factory=AreaAdmin)
    datasets: List[Dict[str, Any]] = Field(default_factory=list)
    tags: Optional[List[str]] = None
    status: AreaStatus = AreaStatus.pending
    public: bool = False
    webhook_url: Optional[str] = None
    email: Optional[str] = None
    subscription_id: Optional[str] = None
    language: Optional[str] = None
    template_id: Optional[str] = None
    image: Optional[str] = None

    @field_validator("use", "iso", "admin", mode="before")
    @classmethod
    def empty_object(cls, v):
        return {} if v is None else v

    @field_validator("datasets", mode="before")
    @classmethod
    def empty_list(cls, v):
        return [] if v is None else v


class AreaAttributesIn(CamelCaseModel):
    """Plain area attributes which can be written by any authorized writer
    (``status`` is only honored for admins)."""

    # Fields backed by non-nullable columns, an explicit null is rejected
    non_nullable_fields: ClassVar[Tuple[str, ...]] = ()

    application: Optional[NonEmptyStr] = None
    status: Optional[AreaStatus] = None
    public: Optional[StrictBool] = None
    env: Optional[NonEmptyStr] = None
    webhook_url: Optional[NonEmptyStr] = None
    email: Optional[NonEmptyStr] = None
    subscription_id: Optional[NonEmptyStr] = None
    language: Optional[NonEmptyStr] = None
    template_id: Optional[str] = None
    tags: Optional[List[str]] = None

    @model_validator(mode="before")
    @classmethod
    def no_explicit_nulls(cls, data):
        if isinstance(data, dict):
            for name in cls.non_nullable_fields:
                alias = cls.model_fields[name].alias or name
                for key in {name, alias}:
                    if key in data and data[key] is None:
                        raise ValueError(f"{alias} cannot be null")
        return data

    @field_validator("env")
    @classmethod
    def lower_env(cls, v):
        return v.lower() if v else v

    @field_validator("tags")
    @classmethod
    def valid_tags(cls, v):
        if v is not None and not all(TAG_REGEX.fullmatch(tag) for tag in v):
            raise ValueError("must be an array of valid strings")
        return v


class AreaGeometryIn(AreaAttributesIn):
    geostore: Optional[str] = None
    geostore_data_api: Optional[str] = None
    wdpaid: Optional[int] = None
    use: Optional[AreaUse] = None
    iso: Optional[AreaIso] = None
    admin: Optional[AreaAdmin] = None
    datasets: Optional[List[Dict[str, Any]]] = None

    @field_validator("geostore", "geostore_data_api")
    @classmethod
    def blank_is_none(cls, v):
        return v or None

    @field_validator("geostore")
    @classmethod
    def hex_geostore(cls, v):
        if v and not HEX_REGEX.fullmatch(v):
            raise ValueError("must be a hexadecimal string")
        return v

    @field_validator("use", "iso", "admin", mode="before")
    @classmethod
    def unwrap_objects(cls, v):
        return _unwrap_json(v)

    @field_validator("datasets", mode="before")
    @classmethod
    def parse_datasets(cls, v):
        if isinstance(v, str):
            try:
                return json.loads(v)
            except ValueError:
                raise ValueError("must be a valid JSON string")
        return v

    @model_validator(mode="after")
    def exclusive_geostores(self):
        if self.geostore and self.geostore_data_api:
            raise ValueError(MUTUALLY_EXCLUSIVE_GEOSTORES)
        return self


class AreaCreateIn(AreaGeometryIn):
    name: str = Field(..., min_length=1, max_length=100)
    map_style: Optional[Dict[str, Any]] = Field(
        None,
        description="Map style used to render the area thumbnail. "
        "Only used when a geostore is provided.",
    )


class AreaUpdateIn(AreaGeometryIn):
    non_nullable_fields: ClassVar[Tuple[str, ...]] = (
        "name",
        "application",
        "env",
        "public",
        "tags",
        "datasets",
        "use",
        "iso",
        "admin",
        "language",
    )

    name: Optional[str] = Field(None, min_length=2, max_length=100)
    user_id: Optional[str] = Field(
        None,
        description="Legacy ownership claim. Grants write access if it matches "
        "the owner of the area. Never written to the area.",
    )


class AreaUpdateByGeostoreParams(AreaAttributesIn):
    non_nullable_fields: ClassVar[Tuple[str, ...]] = (
        "name",
        "application",
        "status",
        "env",
        "public",
        "tags",
        "language",
    )

    name: Optional[str] = Field(None, min_length=1, max_length=100)

    model_config = ConfigDict(extra="forbid")


class AreaUpdateByGeostoreIn(StrictBaseModel):
    geostores: List[str] = Field(default_factory=list)
    update_params: AreaUpdateByGeostoreParams = Field(
        default_factory=AreaUpdateByGeostoreParams
    )


class AreaResponse(Response):
    data: Area


class AreasResponse(Response):
    data: List[Area]


class PaginatedAreasResponse(AreasResponse):
    links: PaginationLinks
    meta: PaginationMeta

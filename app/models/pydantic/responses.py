from typing import Any, Optional

from pydantic import Field

from .base import StrictBaseModel


class Response(StrictBaseModel):
    data: Any
    status: str = "success"


class PaginationLinks(StrictBaseModel):
    self: str = Field(
        ...,
        title="Contains the URL for the current page",
        examples=["https://api.globalforestwatch.org/v2/area?page[number]=1&page[size]=300"],
    )
    first: str = Field(
        ...,
        title="Contains the URL for the first page",
        examples=["https://api.globalforestwatch.org/v2/area?page[number]=1&page[size]=300"],
    )
    last: str = Field(
        ...,
        title="Contains the URL for the last page",
        examples=["https://api.globalforestwatch.org/v2/area?page[number]=4&page[size]=300"],
    )
    prev: Optional[str] = Field(
        None, title="Contains the URL for the previous page", examples=[""]
    )
    next: Optional[str] = Field(
        None,
        title="Contains the URL for the next page",
        examples=["https://api.globalforestwatch.org/v2/area?page[number]=2&page[size]=300"],
    )


class PaginationMeta(StrictBaseModel):
    size: int = Field(
        ...,
        title="The page size. Reflects the value used in the page[size] query parameter (or the default size of 300 if not provided)",
        examples=[300],
    )
    total_items: int = Field(
        ...,
        title="Contains the total number of items",
        examples=[100],
    )
    total_pages: int = Field(
        ...,
        title="Contains the total number of pages, assuming the page size specified in the page[size] query parameter",
        examples=[1],
    )

from math import ceil
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote, urlencode, urlparse

from app.models.pydantic.responses import PaginationLinks, PaginationMeta

PAGE_NUMBER = "page[number]"
PAGE_SIZE = "page[size]"


def host_for_pagination_link(headers: Mapping[str, str], request_host: str) -> str:
    """Links point to the host the client came from, if known."""
    referer = headers.get("referer")
    if referer:
        return urlparse(referer).netloc
    return request_host


def pagination_link_base(
    protocol: str,
    host: str,
    mount_path: str,
    path: str,
    query: Mapping[str, Union[str, Sequence[str]]],
) -> str:
    """Build the URL all page links share.

    Pagination parameters are stripped from the original query. The
    result ends with `?` or `&` so page parameters can be appended.
    """
    pairs: List[Tuple[str, str]] = list()
    for key, value in query.items():
        if key in (PAGE_NUMBER, PAGE_SIZE):
            continue
        values = [value] if isinstance(value, str) else value
        pairs.extend((key, v) for v in values)

    serialized_query = urlencode(pairs, quote_via=quote)
    query_part = f"?{serialized_query}&" if serialized_query else "?"

    api_version = mount_path.rstrip("/").split("/")[-1]
    prefix = f"/{api_version}" if api_version else ""

    return f"{protocol}://{host}{prefix}{path}{query_part}"


def _build_link(link_base: str, page: int, size: int) -> str:
    return f"{link_base}{PAGE_NUMBER}={page}&{PAGE_SIZE}={size}"


def _has_previous(page: int) -> bool:
    return page > 1


def _has_next(page: int, total_pages: int) -> bool:
    return total_pages > page


def _create_pagination_links(
    link_base: str, size: int, page: int, total_pages: int
) -> PaginationLinks:
    if _has_previous(page):
        prev_page = _build_link(link_base, page - 1, size)
    else:
        prev_page = ""

    if _has_next(page, total_pages):
        next_page = _build_link(link_base, page + 1, size)
    else:
        next_page = ""

    return PaginationLinks(
        self=_build_link(link_base, page, size),
        first=_build_link(link_base, 1, size),
        last=_build_link(link_base, total_pages, size),
        prev=prev_page,
        next=next_page,
    )


def _total_pages(total_items: int, size: int) -> int:
    return ceil(total_items / size) if total_items > 0 else 1


def _calculate_offset(page: int, size: int) -> int:
    assert page > 0
    return size * (page - 1)


async def paginate_collection(
    paged_items_fn: Callable[[int, int], Awaitable[List[Any]]],
    item_count_fn: Callable[[], Awaitable[int]],
    link_base: str,
    size: int,
    page: Optional[int] = None,
) -> Tuple[List[Any], PaginationLinks, PaginationMeta]:
    """Pages past the last one are not an error, they are just empty."""

    page_number: int = page if page is not None else 1

    total_items = await item_count_fn()
    total_pages = _total_pages(total_items, size)

    data = await paged_items_fn(size, _calculate_offset(page_number, size))
    links = _create_pagination_links(
        link_base=link_base,
        size=size,
        page=page_number,
        total_pages=total_pages,
    )
    meta = PaginationMeta(size=size, total_items=total_items, total_pages=total_pages)

    return data, links, meta

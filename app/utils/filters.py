from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from ..models.pydantic.authentication import User
from ..settings.globals import DEFAULT_ENV

QueryValue = Union[str, Sequence[str]]
RawQuery = Mapping[str, QueryValue]

ALL_FLAG = "all"
DEFAULT_SORT: List[Tuple[str, bool]] = [("id", False)]

# Wire name -> attribute name of the area fields a list can be ordered by
SORTABLE_FIELDS: Dict[str, str] = {
    "_id": "id",
    "id": "id",
    "name": "name",
    "application": "application",
    "geostore": "geostore",
    "geostoreDataApi": "geostore_data_api",
    "wdpaid": "wdpaid",
    "userId": "user_id",
    "env": "env",
    "status": "status",
    "public": "public",
    "webhookUrl": "webhook_url",
    "email": "email",
    "subscriptionId": "subscription_id",
    "language": "language",
    "templateId": "template_id",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


class AreaFilter(NamedTuple):
    env: List[str]
    user_id: Optional[str] = None
    application: Optional[List[str]] = None
    status: Optional[str] = None
    public: Optional[bool] = None


def _values(value: QueryValue) -> List[str]:
    """Split comma separated values, also across repeated query parameters.

    Blank items are dropped, a parameter without any value counts as absent.
    """
    raw = [value] if isinstance(value, str) else list(value)
    items = (item.strip() for entry in raw for item in entry.split(","))
    return [item for item in items if item]


def _last(value: QueryValue) -> Optional[str]:
    raw = [value] if isinstance(value, str) else list(value)
    items = [item.strip() for item in raw if item.strip()]
    return items[-1] if items else None


def _is_true(value: Optional[str]) -> bool:
    return value is not None and value.lower() == "true"


def use_all_filter(user: User, query: RawQuery) -> bool:
    """Only admins can list areas of all users, and only if they ask for
    it."""
    return user.is_admin and _is_true(_last(query.get(ALL_FLAG, ())))


def build_area_filter(user: User, query: RawQuery) -> AreaFilter:
    user_id: Optional[str] = None if use_all_filter(user, query) else user.id

    application: Optional[List[str]] = _values(query.get("application", ())) or None
    status: Optional[str] = _last(query.get("status", ()))

    public_value = _last(query.get("public", ()))
    public: Optional[bool] = None if public_value is None else _is_true(public_value)

    env = _values(query.get("env", ())) or [DEFAULT_ENV]

    return AreaFilter(
        env=env,
        user_id=user_id,
        application=application,
        status=status,
        public=public,
    )


def build_sort(sort: Optional[str]) -> List[Tuple[str, bool]]:
    """Parse `field,-field2` into (attribute, descending) pairs.

    Unknown fields are dropped. `+` prefixes arrive URL decoded as
    blanks, hence the strip.
    """
    if not sort:
        return list(DEFAULT_SORT)

    filtered_sort: List[Tuple[str, bool]] = list()
    for param in sort.split(","):
        param = param.strip()
        descending = param.startswith("-")
        if param[:1] in ("-", "+"):
            param = param[1:]
        field = SORTABLE_FIELDS.get(param)
        if field is not None and field not in [f for f, _ in filtered_sort]:
            filtered_sort.append((field, descending))

    return filtered_sort or list(DEFAULT_SORT)

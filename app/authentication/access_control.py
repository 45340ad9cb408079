"""Who can see and who can change an area.

Reads are decided by a small table keyed on the relation of the caller
to the area and the visibility of the area. Writes require the caller to
own the area or to be an admin.
"""
from enum import Enum
from typing import Dict, Optional, Tuple

from ..errors import ForbiddenError, UnauthorizedError
from ..models.pydantic.areas import Area
from ..models.pydantic.authentication import User


class Relation(str, Enum):
    anonymous = "anonymous"
    other = "other"
    owner = "owner"
    admin = "admin"


class ReadDecision(str, Enum):
    allow = "allow"
    redact = "redact"
    deny = "deny"


# (relation, area is public) -> decision
READ_DECISIONS: Dict[Tuple[Relation, bool], ReadDecision] = {
    (Relation.anonymous, False): ReadDecision.deny,
    (Relation.anonymous, True): ReadDecision.redact,
    (Relation.other, False): ReadDecision.deny,
    (Relation.other, True): ReadDecision.redact,
    (Relation.owner, False): ReadDecision.allow,
    (Relation.owner, True): ReadDecision.allow,
    (Relation.admin, False): ReadDecision.allow,
    (Relation.admin, True): ReadDecision.allow,
}

REDACTED_FIELDS = (
    "tags",
    "user_id",
    "name",
    "webhook_url",
    "email",
    "language",
    "subscription_id",
)


def relation(user: Optional[User], area: Area) -> Relation:
    if user is None:
        return Relation.anonymous
    if user.is_admin:
        return Relation.admin
    if area.user_id is not None and area.user_id == user.id:
        return Relation.owner
    return Relation.other


def read_decision(user: Optional[User], area: Area) -> ReadDecision:
    return READ_DECISIONS[(relation(user, area), area.public)]


def redact(area: Area) -> Area:
    """Return a copy of the area without owner specific information."""
    return area.model_copy(update={field: None for field in REDACTED_FIELDS})


def area_view(user: Optional[User], area: Area) -> Area:
    decision = read_decision(user, area)
    if decision == ReadDecision.deny:
        raise UnauthorizedError("Area private")
    if decision == ReadDecision.redact:
        return redact(area)
    return area


def ensure_user(user: Optional[User]) -> User:
    if user is None:
        raise UnauthorizedError("Unauthorized")
    return user


def ensure_admin(user: Optional[User]) -> User:
    if not ensure_user(user).is_admin:
        raise ForbiddenError("Not authorized")
    return user


def can_write(user: User, area: Area, claimed_user_id: Optional[str] = None) -> bool:
    """Owners and admins can write.

    Older clients send the owner id along with the payload, which is
    accepted as proof of ownership.
    """
    if user.is_admin:
        return True
    if area.user_id == user.id:
        return True
    return claimed_user_id is not None and area.user_id == claimed_user_id


def ensure_can_write(
    user: Optional[User], area: Area, claimed_user_id: Optional[str] = None
) -> User:
    user = ensure_user(user)
    if not can_write(user, area, claimed_user_id):
        raise ForbiddenError("Not authorized")
    return user


def can_set_status(user: User) -> bool:
    return user.is_admin

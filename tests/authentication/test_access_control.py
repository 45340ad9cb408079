import uuid
from datetime import datetime

import pytest

from app.authentication.access_control import (
    REDACTED_FIELDS,
    ReadDecision,
    Relation,
    area_view,
    can_set_status,
    can_write,
    ensure_admin,
    ensure_can_write,
    ensure_user,
    read_decision,
    relation,
)
from app.errors import ForbiddenError, UnauthorizedError
from app.models.pydantic.areas import Area
from tests import ADMIN_1, USER_1, USER_2


def _area(public: bool) -> Area:
    now = datetime.utcnow()
    return Area(
        id=uuid.uuid4(),
        name="A",
        application="gfw",
        user_id=USER_1.id,
        tags=["forest"],
        webhook_url="https://hook",
        email="u@x.com",
        language="en",
        subscription_id="sub",
        geostore="abc123",
        public=public,
        created_at=now,
        updated_at=now,
    )


def test_relation():
    area = _area(public=False)

    assert relation(None, area) == Relation.anonymous
    assert relation(USER_2, area) == Relation.other
    assert relation(USER_1, area) == Relation.owner
    assert relation(ADMIN_1, area) == Relation.admin


@pytest.mark.parametrize(
    "user,public,decision",
    [
        (None, False, ReadDecision.deny),
        (None, True, ReadDecision.redact),
        (USER_2, False, ReadDecision.deny),
        (USER_2, True, ReadDecision.redact),
        (USER_1, False, ReadDecision.allow),
        (USER_1, True, ReadDecision.allow),
        (ADMIN_1, False, ReadDecision.allow),
        (ADMIN_1, True, ReadDecision.allow),
    ],
)
def test_read_decision(user, public, decision):
    assert read_decision(user, _area(public)) == decision


def test_area_view_redacts_owner_fields():
    area = _area(public=True)

    view = area_view(USER_2, area)

    for field in REDACTED_FIELDS:
        assert getattr(view, field) is None
    assert view.id == area.id
    assert view.geostore == area.geostore
    assert view.application == area.application
    assert area.email == "u@x.com"

    assert area_view(USER_1, area) == area


def test_area_view_private():
    with pytest.raises(UnauthorizedError):
        area_view(USER_2, _area(public=False))


def test_ensure_user_and_admin():
    assert ensure_user(USER_1) == USER_1
    assert ensure_admin(ADMIN_1) == ADMIN_1

    with pytest.raises(UnauthorizedError):
        ensure_user(None)
    with pytest.raises(UnauthorizedError):
        ensure_admin(None)
    with pytest.raises(ForbiddenError):
        ensure_admin(USER_1)


def test_write_permission():
    area = _area(public=True)

    assert can_write(USER_1, area)
    assert can_write(ADMIN_1, area)
    assert not can_write(USER_2, area)
    assert can_write(USER_2, area, claimed_user_id=USER_1.id)
    assert not can_write(USER_2, area, claimed_user_id=USER_2.id)

    with pytest.raises(ForbiddenError):
        ensure_can_write(USER_2, area)
    with pytest.raises(UnauthorizedError):
        ensure_can_write(None, area)


def test_can_set_status():
    assert can_set_status(ADMIN_1)
    assert not can_set_status(USER_1)

from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi import HTTPException

from app.authentication import token


@pytest.fixture
def who_am_i(monkeypatch):
    def _who_am_i(response: httpx.Response) -> AsyncMock:
        mock = AsyncMock(return_value=response)
        monkeypatch.setattr(token, "who_am_i", mock)
        return mock

    return _who_am_i


@pytest.mark.asyncio
async def test_get_user(who_am_i):
    who_am_i(
        httpx.Response(
            200,
            json={"id": "admin_1", "role": "ADMIN", "email": "a@x.com", "extra": 1},
        )
    )

    user = await token.get_user("my_token")

    assert user.id == "admin_1"
    assert user.is_admin


@pytest.mark.asyncio
async def test_get_user_unauthorized(who_am_i):
    who_am_i(httpx.Response(401))

    with pytest.raises(HTTPException) as e:
        await token.get_user("my_token")
    assert e.value.status_code == 401


@pytest.mark.asyncio
async def test_get_user_or_none(who_am_i):
    mock = who_am_i(httpx.Response(401))

    assert await token.get_user_or_none(None) is None
    mock.assert_not_awaited()

    assert await token.get_user_or_none("my_token") is None

    who_am_i(httpx.Response(200, json={"id": "user_1"}))
    user = await token.get_user_or_none("my_token")
    assert user.id == "user_1"
    assert user.role == "USER"
    assert not user.is_admin

import contextlib
from typing import Optional
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.authentication.token import get_user, get_user_or_none
from app.models.pydantic.authentication import User
from app.routes.areas import area_service
from app.services.areas import AreaService

pytest.register_assert_rewrite("tests.utils")

from tests import IMAGE_URL  # noqa: E402
from tests.utils import FakeAreaRepository  # noqa: E402


@pytest.fixture
def repository() -> FakeAreaRepository:
    return FakeAreaRepository()


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock(return_value=None)


@pytest.fixture
def renderer() -> AsyncMock:
    return AsyncMock(return_value=b"\x89PNG")


@pytest.fixture
def blob_store() -> AsyncMock:
    return AsyncMock(return_value=IMAGE_URL)


@pytest.fixture
def service(repository, notifier, renderer, blob_store) -> AreaService:
    """Area service without background tasks, notifications are sent
    inline."""
    return AreaService(
        repository=repository,
        notifier=notifier,
        renderer=renderer,
        blob_store=blob_store,
        flagship_url="https://www.globalforestwatch.org",
        create_application="ahw",
        default_application="gfw",
        default_env="production",
        page_size=300,
        supported_languages=("en",),
        default_language="en",
    )


@contextlib.asynccontextmanager
async def client_with_mocks(service: AreaService, user: Optional[User] = None):
    """Test client talking to the app with the given service. Requests are
    authenticated as `user`, anonymous if no user is given."""
    from app.main import app

    app.dependency_overrides[area_service] = lambda: service
    if user is not None:
        app.dependency_overrides[get_user] = lambda: user
        app.dependency_overrides[get_user_or_none] = lambda: user

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as http_client:
        yield http_client

    app.dependency_overrides = {}


@pytest.fixture
def async_client(service):
    """Factory for test clients sharing the service of the test."""

    def _client(user: Optional[User] = None):
        return client_with_mocks(service, user)

    return _client

import pytest
from httpx import ASGITransport, AsyncClient


@pytest.mark.asyncio
async def test_ping():
    from app.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.get("/ping")

    assert response.status_code == 200
    assert response.json() == {"data": "pong", "status": "success"}

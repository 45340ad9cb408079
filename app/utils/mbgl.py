from typing import Any, Dict

from fastapi.logger import logger
from httpx import AsyncClient, HTTPError, InvalidURL
from httpx import Response as HTTPXResponse

from ..errors import UpstreamDependencyError
from ..settings.globals import MBGL_RENDER_API_URL, RENDER_TIMEOUT


async def get_image_from_style(map_style: Dict[str, Any]) -> bytes:
    """Render a Mapbox GL style into a PNG image."""

    logger.info("Generating map image from style")
    try:
        async with AsyncClient() as client:
            response: HTTPXResponse = await client.post(
                MBGL_RENDER_API_URL, json=map_style, timeout=RENDER_TIMEOUT
            )
    except (HTTPError, InvalidURL) as e:
        raise UpstreamDependencyError(f"Call to map renderer failed: {e!r}")

    if response.status_code != 200:
        raise UpstreamDependencyError(
            f"Map renderer responded with status code {response.status_code}: {response.text}"
        )

    return response.content

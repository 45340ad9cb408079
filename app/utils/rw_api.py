from fastapi import HTTPException
from fastapi.logger import logger
from httpx import AsyncClient, HTTPError, TimeoutException
from httpx import Response as HTTPXResponse

from ..settings.globals import AUTH_TIMEOUT, RW_API_URL


async def who_am_i(token: str) -> HTTPXResponse:
    """Ask the RW API who the token belongs to.

    Returns the response as is if the token was accepted (200) or
    rejected (401). Everything else is a failure of the identity service.
    """

    headers = {"Authorization": f"Bearer {token}"}
    url = f"{RW_API_URL}/auth/check-logged"

    try:
        async with AsyncClient() as client:
            response: HTTPXResponse = await client.get(
                url, headers=headers, timeout=AUTH_TIMEOUT
            )
    except TimeoutException:
        raise HTTPException(
            status_code=500,
            detail="Call to authorization server timed-out. Please try again.",
        )
    except HTTPError as e:
        logger.error(f"Call to authorization server failed: {e!r}")
        raise HTTPException(
            status_code=500, detail="Call to authorization server failed"
        )

    if response.status_code not in (200, 401):
        logger.warning(
            f"Failed to authorize user. Server responded with response code: {response.status_code} and message: {response.text}"
        )
        raise HTTPException(
            status_code=500, detail="Call to authorization server failed"
        )

    return response

from typing import Any, Dict, List

from fastapi.logger import logger
from httpx import AsyncClient, HTTPError, InvalidURL
from httpx import Response as HTTPXResponse

from ..errors import UpstreamDependencyError
from ..settings.globals import MAIL_SERVICE_URL, SERVICE_ACCOUNT_TOKEN


async def send_mail(
    template: str,
    data: Dict[str, Any],
    recipients: List[Dict[str, str]],
    sender: str,
) -> None:
    """Ask the mail service to deliver a templated email."""

    headers = {"Authorization": f"Bearer {SERVICE_ACCOUNT_TOKEN}"}
    payload = {
        "template": template,
        "data": data,
        "recipients": recipients,
        "sender": sender,
    }

    logger.info(f"Sending mail with template {template} for application {sender}")
    try:
        async with AsyncClient() as client:
            response: HTTPXResponse = await client.post(
                MAIL_SERVICE_URL, json=payload, headers=headers, timeout=10.0
            )
    except (HTTPError, InvalidURL) as e:
        raise UpstreamDependencyError(f"Call to mail service failed: {e!r}")

    if response.status_code >= 300:
        raise UpstreamDependencyError(
            f"Mail service responded with status code {response.status_code}: {response.text}"
        )

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.logger import logger
from starlette.concurrency import run_in_threadpool

from ..errors import UpstreamDependencyError
from ..settings.globals import (
    AREA_IMAGE_BUCKET,
    AREA_IMAGE_FOLDER,
    AWS_REGION,
    S3_ENTRYPOINT_URL,
)


def client_constructor(service: str, entrypoint_url=None):
    """Using closure design for a client constructor This way we only need to
    create the client once in central location and it will be easier to
    mock."""
    service_client = None

    def client():
        nonlocal service_client
        if service_client is None:
            service_client = boto3.client(
                service, region_name=AWS_REGION, endpoint_url=entrypoint_url
            )
        return service_client

    return client


get_s3_client = client_constructor("s3", S3_ENTRYPOINT_URL)


def _public_url(bucket: str, key: str) -> str:
    if S3_ENTRYPOINT_URL:
        return f"{S3_ENTRYPOINT_URL}/{bucket}/{key}"
    return f"https://{bucket}.s3.amazonaws.com/{key}"


async def upload_image(image: bytes, file_name: str) -> str:
    """Upload a rendered area image and return its public URL."""

    key = f"{AREA_IMAGE_FOLDER}/{file_name}"
    logger.info(f"Uploading area image to s3://{AREA_IMAGE_BUCKET}/{key}")

    try:
        await run_in_threadpool(
            get_s3_client().put_object,
            Bucket=AREA_IMAGE_BUCKET,
            Key=key,
            Body=image,
            ACL="public-read",
            ContentType="image/png",
        )
    except (BotoCoreError, ClientError) as e:
        raise UpstreamDependencyError(f"Could not upload area image {key}: {e}")

    return _public_url(AREA_IMAGE_BUCKET, key)

import sys
import traceback

from fastapi import HTTPException
from fastapi.responses import ORJSONResponse

from app.settings.globals import ENV


class RecordNotFoundError(Exception):
    pass


class UnauthorizedError(Exception):
    pass


class ForbiddenError(Exception):
    pass


class UpstreamDependencyError(Exception):
    """An auxiliary service (renderer, storage, mail, identity) failed."""

    pass


def http_error_handler(exc: HTTPException) -> ORJSONResponse:

    message = exc.detail
    if exc.status_code < 500:
        status = "failed"
    else:
        status = "error"
        # In dev and test print full traceback of internal server errors
        if ENV == "test" or ENV == "dev":
            exc_type, exc_value, exc_traceback = sys.exc_info()
            message = traceback.format_exception(exc_type, exc_value, exc_traceback)
    return ORJSONResponse(
        status_code=exc.status_code,
        content={"status": status, "message": message},
        headers=getattr(exc, "headers", None),
    )

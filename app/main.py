import json
import logging
from asyncio.exceptions import TimeoutError as AsyncTimeoutError

from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.logger import logger
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.requests import Request
from fastapi.responses import ORJSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.errors import http_error_handler

from .application import app
from .middleware import log_request, no_cache_response_header, set_db_mode
from .routes import areas as areas_routes
from .routes import health
from .routes.areas import area, areas
from .settings.globals import API_PREFIX

gunicorn_logger = logging.getLogger("gunicorn.error")
logger.handlers = gunicorn_logger.handlers


@app.exception_handler(AsyncTimeoutError)
async def timeout_error_handler(
    request: Request, exc: AsyncTimeoutError
) -> ORJSONResponse:
    return http_error_handler(
        HTTPException(status_code=524, detail="Request timed out and was canceled.")
    )


@app.exception_handler(HTTPException)
async def httpexception_error_handler(
    request: Request, exc: HTTPException
) -> ORJSONResponse:
    return http_error_handler(exc)


@app.exception_handler(RequestValidationError)
async def rve_error_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """Invalid payloads and query parameters fail with the field level
    detail."""
    errors = json.loads(json.dumps(exc.errors(), default=str))
    return ORJSONResponse(
        status_code=422, content={"status": "failed", "message": errors}
    )


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception) -> ORJSONResponse:
    logger.exception(f"Unexpected error processing {request.method} {request.url.path}")
    return http_error_handler(
        HTTPException(status_code=500, detail="Could not process request.")
    )


for dispatch in (set_db_mode, no_cache_response_header, log_request):
    app.add_middleware(BaseHTTPMiddleware, dispatch=dispatch)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"]
)

for router in (areas.router, area.router):
    app.include_router(router, prefix=f"{API_PREFIX}/area")
app.include_router(health.router)

app.openapi_tags = [
    {"name": "Areas", "description": areas_routes.__doc__},
    {"name": "Health", "description": health.__doc__},
]

if __name__ == "__main__":
    import uvicorn

    logger.setLevel(logging.DEBUG)
    uvicorn.run(app, host="0.0.0.0", port=8888, log_level="info")
else:
    logger.setLevel(gunicorn_logger.level)

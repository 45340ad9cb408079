from time import perf_counter

from fastapi import Request
from fastapi.logger import logger

from .application import READ, WRITE, ContextEngine


async def set_db_mode(request: Request, call_next):
    """Read requests use the read replica pool, write requests the writer
    pool."""
    mode = WRITE if request.method in ("PUT", "PATCH", "POST", "DELETE") else READ
    async with ContextEngine(mode):
        response = await call_next(request)
    return response


async def log_request(request: Request, call_next):
    """Log method, path, status code and duration of every request."""
    start = perf_counter()
    response = await call_next(request)
    duration = (perf_counter() - start) * 1000

    logger.info(
        f"{request.method} {request.url.path} {response.status_code} {duration:.1f}ms"
    )
    return response


async def no_cache_response_header(request: Request, call_next):
    """This middleware adds a cache control response header.

    Areas are user specific, responses must not be cached. Individual
    endpoints can override this header.
    """
    response = await call_next(request)

    if "Cache-Control" not in response.headers:
        response.headers["Cache-Control"] = "no-cache"

    return response

from asyncio import Future
from contextvars import ContextVar
from typing import Any, Dict, Tuple

from fastapi import FastAPI
from fastapi.logger import logger
from gino import Gino, create_engine
from gino.engine import GinoEngine

from .settings.globals import (
    DATABASE_CONFIG,
    SQL_REQUEST_TIMEOUT,
    WRITE_DATABASE_CONFIG,
)

READ = "READ"
WRITE = "WRITE"

# Engine of the current request. Concurrent requests each see their own.
CURRENT_ENGINE: ContextVar = ContextVar("engine")

# Pool url and options per database mode
POOLS: Dict[str, Tuple[Any, Dict[str, Any]]] = {
    WRITE: (WRITE_DATABASE_CONFIG.url, dict(max_size=5, min_size=1)),
    READ: (
        DATABASE_CONFIG.url,
        dict(max_size=10, min_size=5, command_timeout=SQL_REQUEST_TIMEOUT),
    ),
}
ENGINES: Dict[str, GinoEngine] = dict()


class ContextualGino(Gino):
    """Gino metadata bound to the engine of the current request.

    Outside of a request the default bind, the writer pool, is used.
    """

    @property
    def bind(self):
        try:
            return CURRENT_ENGINE.get().result()
        except LookupError:
            return self._bind

    @bind.setter
    def bind(self, val):
        self._bind = val


app = FastAPI(
    title="GFW Areas API",
    version="2.0.0",
    description="Manage areas of interest and their alert subscriptions.",
    redoc_url="/",
)
db = ContextualGino()


class ContextEngine:
    """Bind the pool of the given database mode for the enclosed block,
    unless an outer block already did."""

    def __init__(self, mode: str):
        self.mode = mode.upper()

    async def __aenter__(self):
        try:
            engine = CURRENT_ENGINE.get()
        except LookupError:
            engine = Future()
            engine.set_result(ENGINES.get(self.mode))
            logger.debug(f"Use {self.mode.lower()} engine")
        self.token = CURRENT_ENGINE.set(engine)

    async def __aexit__(self, _type, value, tb):
        CURRENT_ENGINE.reset(self.token)


@app.on_event("startup")
async def startup_event():
    for mode, (url, options) in POOLS.items():
        ENGINES[mode] = await create_engine(url, **options)
        logger.info(f"Created {mode.lower()} connection pool {ENGINES[mode]!r}")
    db.bind = ENGINES[WRITE]


@app.on_event("shutdown")
async def shutdown_event():
    while ENGINES:
        mode, engine = ENGINES.popitem()
        await engine.close()
        logger.info(f"Closed {mode.lower()} connection pool {engine!r}")

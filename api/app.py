"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.routes import health, identifiers
from config import load_config
from core.health import HealthChecker, check_event_loop, create_horizon_check
from ids.codec import SafeIntId
from internal.logging import get_logger, StructuredLogger
from utils.crash import create_async_handler

VERSION = "1.0.0"


def create_app(config=None, codec=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    StructuredLogger.configure(min_level=config.logging.level)
    logger_instance = get_logger()

    # One generator per app; its sequence is only touched from the event loop
    codec = codec or SafeIntId.from_config(config.ids)
    health_checker = HealthChecker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("safe_horizon", create_horizon_check(codec), critical=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version=VERSION, **codec.to_dict())
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))
        yield
        logger_instance.info("Application shutdown complete")

    app = FastAPI(
        title="Safe Int ID",
        version=VERSION,
        description="uncoordinated sortable 53-bit integer IDs",
        lifespan=lifespan,
    )
    app.state.codec = codec

    identifiers.init(codec)
    health.init(codec, health_checker)

    app.include_router(identifiers.router)
    app.include_router(health.router)

    return app

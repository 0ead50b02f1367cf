"""
FastAPI application factory.

* Registers the driver, location, ride and health routes under ``/api``.
* Optionally creates the schema on startup; disposes the engine on shutdown.
* Applies rate limiting.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from journal.api.middleware import limiter
from journal.api.routes import drivers, health, locations, rides
from journal.config import settings
from journal.infrastructure.database import Base, engine

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables if asked to on startup; release pooled connections on shutdown."""
    if settings.create_schema_on_startup:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema created")
    logger.info("Driving journal API started")
    yield
    await engine.dispose()
    logger.info("Driving journal API stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Driving Journal API",
        description=(
            "Keeps a driving journal: drivers record the locations they "
            "visit and the rides they make between them, with odometer "
            "readings and traffic conditions."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(drivers.router, prefix="/api")
    app.include_router(locations.router, prefix="/api")
    app.include_router(rides.router, prefix="/api")
    app.include_router(health.router, prefix="/api")

    return app

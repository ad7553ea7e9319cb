import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from beacon.config import Settings, settings as default_settings
from beacon.database import build_engine, build_session_factory, create_tables
from beacon.exception_handlers import register_exception_handlers
from beacon.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from beacon.routes import monitoring, pixel, stats
from beacon.services.view_store import ViewStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared engine and view store once per process."""
    settings: Settings = app.state.settings
    logger.info("Starting up the application...")

    engine = build_engine(settings)
    if settings.create_tables_on_startup:
        await create_tables(engine)

    app.state.engine = engine
    app.state.view_store = ViewStore(build_session_factory(engine))

    try:
        yield
    finally:
        logger.info("Shutting down the application...")
        await engine.dispose()


def create_app(settings: Settings | None = None, configure_logging: bool = True) -> FastAPI:
    """Create the FastAPI application."""
    settings = settings or default_settings

    if configure_logging:
        setup_structured_logging(
            log_level=settings.log_level,
            json_format=settings.log_json,
            log_file=settings.log_file,
        )

    app = FastAPI(
        title=settings.app_name,
        description="Tracking pixel beacon with view statistics",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(StructuredLoggingMiddleware, trust_forwarded_headers=settings.trust_forwarded_headers)
    register_exception_handlers(app)

    app.include_router(pixel.router)
    app.include_router(stats.router)
    app.include_router(monitoring.router)

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)  # Logs SQL statements
        logging.getLogger("sqlalchemy.pool").setLevel(logging.INFO)  # Logs connection pool checkouts

    return app

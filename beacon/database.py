import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from beacon.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the process-wide async engine (and its connection pool).

    SQLite uses SQLAlchemy's default pool for aiosqlite, so pool sizing
    only applies to server databases.
    """
    url = make_url(settings.database_url)

    if url.get_backend_name() == "sqlite":
        return create_async_engine(settings.database_url, echo=settings.debug)

    # Environment-based configurations
    if settings.environment == "production":
        return create_async_engine(
            settings.database_url,
            pool_size=20,
            max_overflow=50,
            pool_timeout=60,
            pool_recycle=1800,
            pool_pre_ping=True,
        )

    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def create_tables(engine: AsyncEngine) -> None:
    # Import models so they are registered on Base.metadata
    from beacon.models import pixel_hit  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created (if not existing).")

"""
View Store

Append-only storage for pixel hits. Each operation opens its own session,
so a connection is borrowed from the engine pool for the duration of that
one operation and returned when it finishes, whether it succeeded or not.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.future import select

from beacon.exceptions import StoreReadError, StoreWriteError
from beacon.models.pixel_hit import PixelHit

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"


@dataclass(frozen=True)
class ViewEvent:
    """A single beacon fetch, as recorded by the pixel handler."""

    ip_address: str
    user_agent: str
    camo_id: str
    timestamp: datetime
    id: int | None = None


class ViewStore:
    """SQLAlchemy-backed store for view events"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def insert(self, view: ViewEvent) -> ViewEvent:
        """
        Append a view event.

        Args:
            view: Event to store; its ``id`` is ignored

        Returns:
            The stored event with its assigned id

        Raises:
            StoreWriteError: If the insert could not be committed
        """
        hit = PixelHit(
            ip_address=view.ip_address,
            user_agent=view.user_agent,
            camo_id=view.camo_id,
            timestamp=view.timestamp,
        )
        try:
            async with self._session_factory() as session:
                session.add(hit)
                await session.commit()
                await session.refresh(hit)
        except (SQLAlchemyError, OSError) as e:
            raise StoreWriteError() from e

        return _to_event(hit)

    async def count_all(self) -> int:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(func.count(PixelHit.id)))
                return result.scalar() or 0
        except (SQLAlchemyError, OSError) as e:
            raise StoreReadError(operation="count_all") from e

    async def count_since(self, since: datetime) -> int:
        """Count events strictly newer than ``since``."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(func.count(PixelHit.id)).where(PixelHit.timestamp > since))
                return result.scalar() or 0
        except (SQLAlchemyError, OSError) as e:
            raise StoreReadError(operation="count_since") from e

    async def recent(self, limit: int = 10) -> list[ViewEvent]:
        """Most recent events, newest first. Ties on timestamp fall back to insertion order."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(PixelHit).order_by(PixelHit.timestamp.desc(), PixelHit.id.desc()).limit(limit)
                )
                hits = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            raise StoreReadError(operation="recent") from e

        return [_to_event(hit) for hit in hits]


def _to_event(hit: PixelHit) -> ViewEvent:
    return ViewEvent(
        id=hit.id,
        ip_address=hit.ip_address or UNKNOWN,
        user_agent=hit.user_agent or "",
        camo_id=hit.camo_id or "",
        timestamp=hit.timestamp,
    )

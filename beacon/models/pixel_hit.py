"""Pixel hit model: one row per accepted beacon fetch."""

from datetime import timezone

from sqlalchemy import Column, DateTime, Index, Integer, Text
from sqlalchemy.types import TypeDecorator

from beacon.database import Base


class UTCDateTime(TypeDecorator):
    """Stores naive UTC, returns aware UTC datetimes on every backend."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("naive datetime given; pixel hit timestamps must be timezone-aware")
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


class PixelHit(Base):
    __tablename__ = "pixel_hits"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    ip_address = Column(Text, nullable=True)
    user_agent = Column(Text, nullable=True)
    camo_id = Column(Text, nullable=True)
    timestamp = Column(UTCDateTime, nullable=False)

    __table_args__ = (Index("idx_pixel_hits_timestamp", "timestamp"),)

    def __repr__(self) -> str:
        return f"<PixelHit id={self.id} camo_id={self.camo_id!r} timestamp={self.timestamp}>"

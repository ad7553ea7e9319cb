"""
Stats Service

Summarizes recorded views over fixed windows. Each figure is its own read,
so the result is close to, but not exactly, a single snapshot.
"""

from datetime import datetime, timedelta, timezone

from beacon.schemas.stats import RecentView, StatsResponse
from beacon.services.view_store import ViewStore

RECENT_VIEWS_LIMIT = 10
DAY = timedelta(days=1)
WEEK = timedelta(days=7)


async def get_view_statistics(store: ViewStore, now: datetime | None = None) -> StatsResponse:
    """
    Get total, daily and weekly view counts and the latest views.

    Args:
        store: View store to read from
        now: Reference instant for the windows; defaults to the current UTC time

    Returns:
        StatsResponse

    Raises:
        StoreReadError: If any of the reads fails; no partial result is returned
    """
    now = now or datetime.now(timezone.utc)

    total_views = await store.count_all()
    views_today = await store.count_since(now - DAY)
    views_this_week = await store.count_since(now - WEEK)
    recent = await store.recent(RECENT_VIEWS_LIMIT)

    return StatsResponse(
        total_views=total_views,
        views_today=views_today,
        views_this_week=views_this_week,
        recent_views=[
            RecentView(
                timestamp=view.timestamp,
                camo_id=view.camo_id or "",
                user_agent=view.user_agent or "",
            )
            for view in recent
        ],
    )

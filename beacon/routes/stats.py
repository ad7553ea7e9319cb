"""
Stats Routes

Aggregated view counts for the tracking pixel.
"""

from fastapi import APIRouter, Depends

from beacon.dependencies import get_view_store
from beacon.schemas.stats import StatsResponse
from beacon.services.stats_service import get_view_statistics
from beacon.services.view_store import ViewStore

router = APIRouter(tags=["Stats"])


@router.get("/stats", response_model=StatsResponse)
async def get_stats(store: ViewStore = Depends(get_view_store)) -> StatsResponse:
    """
    Get view statistics.

    **Returns**:
    - Total views ever recorded
    - Views in the last 24 hours
    - Views in the last 7 days
    - The 10 most recent views, newest first
    """
    return await get_view_statistics(store)

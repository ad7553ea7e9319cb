"""
Pixel Routes

Serves the tracking pixel and records each accepted fetch.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response

from beacon.config import Settings
from beacon.dependencies import get_settings, get_view_store
from beacon.services.beacon_service import NO_CACHE_HEADERS, PIXEL_GIF, UNKNOWN, record_view, resolve_client_ip
from beacon.services.view_store import ViewStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Beacon"])


@router.get(
    "/pixel.gif",
    response_class=Response,
    responses={
        200: {"content": {"image/gif": {}}, "description": "1x1 transparent GIF"},
        403: {"description": "User agent is not an image proxy"},
        500: {"description": "View could not be recorded"},
    },
)
async def get_pixel(
    request: Request,
    store: ViewStore = Depends(get_view_store),
    settings: Settings = Depends(get_settings),
):
    """
    Serve the tracking pixel.

    Only fetches whose User-Agent contains `github-camo` are recorded; all
    others get an empty 403. The user-agent check is a categorization
    signal and can be forged by any client.
    """
    logger.debug("Pixel request headers", extra={"headers": dict(request.headers)})

    user_agent = request.headers.get("User-Agent", UNKNOWN)
    ip_address = resolve_client_ip(request, trust_forwarded_headers=settings.trust_forwarded_headers)

    await record_view(store, user_agent=user_agent, ip_address=ip_address)

    return Response(content=PIXEL_GIF, media_type="image/gif", headers=NO_CACHE_HEADERS)

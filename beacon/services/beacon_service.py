"""
Beacon Service

Classifies pixel fetches by user agent and records accepted ones.
"""

import logging
from datetime import datetime, timezone

from fastapi import Request

from beacon.exceptions import ValidationRejectedError
from beacon.services.view_store import UNKNOWN, ViewEvent, ViewStore

logger = logging.getLogger(__name__)

# 1x1 transparent GIF
PIXEL_GIF = bytes(
    [
        0x47, 0x49, 0x46, 0x38, 0x39, 0x61, 0x01, 0x00, 0x01, 0x00, 0x80, 0x00, 0x00, 0xFF, 0xFF, 0xFF,
        0x00, 0x00, 0x00, 0x21, 0xF9, 0x04, 0x01, 0x00, 0x00, 0x00, 0x00, 0x2C, 0x00, 0x00, 0x00, 0x00,
        0x01, 0x00, 0x01, 0x00, 0x00, 0x02, 0x02, 0x44, 0x01, 0x00, 0x3B,
    ]
)  # fmt: skip

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

CAMO_MARKER = "github-camo"
CAMO_PREFIX = "github-camo ("
NON_GITHUB_CAMO_ID = "non-github"


def is_camo_request(user_agent: str) -> bool:
    return CAMO_MARKER in user_agent


def extract_camo_id(user_agent: str) -> str:
    """
    Pull the camo identifier out of a user agent like ``github-camo (abc123)``.

    A user agent that contains the marker without starting with it yields
    ``"non-github"``. Acceptance only checks for the marker anywhere in the
    string, so such requests are still recorded.

    Repeated leading ``github-camo (`` prefixes and every trailing ``)`` are
    stripped, so ``github-camo (github-camo (x))`` yields ``x``.
    """
    if not user_agent.startswith(CAMO_MARKER):
        return NON_GITHUB_CAMO_ID
    camo_id = user_agent
    while camo_id.startswith(CAMO_PREFIX):
        camo_id = camo_id[len(CAMO_PREFIX) :]
    return camo_id.rstrip(")")


def resolve_client_ip(request: Request, trust_forwarded_headers: bool = True) -> str:
    """Caller address, preferring proxy headers when they are trusted."""
    if trust_forwarded_headers:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            first = forwarded_for.split(",")[0].strip()
            if first:
                return first
        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN


async def record_view(
    store: ViewStore,
    user_agent: str,
    ip_address: str,
    now: datetime | None = None,
) -> ViewEvent:
    """
    Validate a pixel fetch and append it to the store.

    Args:
        store: View store to append to
        user_agent: Raw User-Agent header, or "unknown" when absent
        ip_address: Resolved caller address
        now: Acceptance instant; defaults to the current UTC time

    Raises:
        ValidationRejectedError: If the user agent lacks the camo marker
        StoreWriteError: If the event could not be stored (it is dropped)
    """
    if not is_camo_request(user_agent):
        raise ValidationRejectedError(user_agent)

    view = ViewEvent(
        ip_address=ip_address,
        user_agent=user_agent,
        camo_id=extract_camo_id(user_agent),
        timestamp=now or datetime.now(timezone.utc),
    )
    stored = await store.insert(view)

    logger.info(f"Recorded view {stored.id} for camo_id={stored.camo_id!r} from {stored.ip_address}")
    return stored

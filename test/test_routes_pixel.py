"""
Tests for Pixel Routes

Tests the beacon endpoint against both the SQLite-backed store and the
in-memory mock store.
"""

import asyncio

import pytest

from beacon.services.beacon_service import PIXEL_GIF
from utils.fixtures import CAMO_USER_AGENT, CLIENT_ADDRESS


class TestPixelAccepted:
    """Accepted beacon fetches"""

    @pytest.mark.asyncio
    async def test_returns_pixel_gif(self, client):
        """Test camo fetch returns the 1x1 GIF with no-cache headers"""
        response = await client.get("/pixel.gif", headers={"User-Agent": CAMO_USER_AGENT})

        assert response.status_code == 200
        assert response.content == PIXEL_GIF
        assert len(response.content) == 43
        assert response.headers["content-type"] == "image/gif"
        assert response.headers["cache-control"] == "no-cache, no-store, must-revalidate"
        assert response.headers["pragma"] == "no-cache"
        assert response.headers["expires"] == "0"

    @pytest.mark.asyncio
    async def test_stores_camo_id(self, client, view_store):
        """Test the identifier inside the parentheses is stored"""
        await client.get("/pixel.gif", headers={"User-Agent": "github-camo (abc123)"})

        events = await view_store.recent(10)
        assert len(events) == 1
        assert events[0].camo_id == "abc123"
        assert events[0].user_agent == "github-camo (abc123)"
        assert events[0].ip_address == CLIENT_ADDRESS[0]
        assert events[0].timestamp.tzinfo is not None

    @pytest.mark.asyncio
    async def test_marker_not_at_start_stores_non_github(self, client, view_store):
        """Test a user agent containing the marker elsewhere is accepted as non-github"""
        response = await client.get("/pixel.gif", headers={"User-Agent": "xxgithub-camo yyy"})

        assert response.status_code == 200
        events = await view_store.recent(10)
        assert [event.camo_id for event in events] == ["non-github"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "user_agent",
        ["github-camo (a)", "github-camo (" + "x" * 500 + ")", "github-camo (weird id with spaces)"],
    )
    async def test_pixel_bytes_independent_of_identifier(self, mock_client, user_agent):
        """Test the image is byte-identical whatever the identifier"""
        response = await mock_client.get("/pixel.gif", headers={"User-Agent": user_agent})

        assert response.status_code == 200
        assert response.content == PIXEL_GIF

    @pytest.mark.asyncio
    async def test_forwarded_for_is_recorded(self, mock_client, mock_store):
        """Test the first X-Forwarded-For address wins over the socket peer"""
        await mock_client.get(
            "/pixel.gif",
            headers={"User-Agent": CAMO_USER_AGENT, "X-Forwarded-For": "198.51.100.4, 10.0.0.1"},
        )

        assert mock_store.events[0].ip_address == "198.51.100.4"

    @pytest.mark.asyncio
    async def test_concurrent_fetches_each_store_one_event(self, client, view_store):
        """Test N simultaneous fetches produce exactly N events"""
        before = await view_store.count_all()

        responses = await asyncio.gather(
            *[client.get("/pixel.gif", headers={"User-Agent": f"github-camo (id{i})"}) for i in range(10)]
        )

        assert all(response.status_code == 200 for response in responses)
        assert await view_store.count_all() == before + 10
        stored_ids = {event.camo_id for event in await view_store.recent(10)}
        assert stored_ids == {f"id{i}" for i in range(10)}


class TestPixelRejected:
    """Rejected beacon fetches"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "user_agent",
        ["Mozilla/5.0 (X11; Linux x86_64)", "curl/8.4.0", "github camo (abc)", "GITHUB-CAMO (abc)", ""],
    )
    async def test_non_camo_user_agent_forbidden(self, mock_client, mock_store, user_agent):
        """Test non-camo user agents get an empty 403 and no write"""
        response = await mock_client.get("/pixel.gif", headers={"User-Agent": user_agent})

        assert response.status_code == 403
        assert response.content == b""
        assert mock_store.insert_calls == 0

    @pytest.mark.asyncio
    async def test_missing_user_agent_forbidden(self, mock_client, mock_store):
        """Test a request without User-Agent is treated as unknown and rejected"""
        mock_client.headers.pop("User-Agent", None)

        response = await mock_client.get("/pixel.gif")

        assert response.status_code == 403
        assert mock_store.insert_calls == 0

    @pytest.mark.asyncio
    async def test_rejection_leaves_database_untouched(self, client, view_store):
        """Test rejected fetches never reach the real store"""
        await client.get("/pixel.gif", headers={"User-Agent": "Mozilla/5.0"})

        assert await view_store.count_all() == 0


class TestPixelStoreFailure:
    """Store write failures"""

    @pytest.mark.asyncio
    async def test_write_failure_returns_500(self, mock_client, mock_store):
        """Test a failed insert yields 500 without leaking storage details"""
        mock_store.fail_writes = True

        response = await mock_client.get("/pixel.gif", headers={"User-Agent": CAMO_USER_AGENT})

        assert response.status_code == 500
        body = response.json()
        assert body["error"]["error_code"] == "STORE_WRITE_FAILED"
        assert "pixel_hits" not in response.text
        assert "disk I/O" not in response.text
        assert mock_store.events == []

    @pytest.mark.asyncio
    async def test_service_keeps_serving_after_failure(self, mock_client, mock_store):
        """Test a store failure only affects the current request"""
        mock_store.fail_writes = True
        failed = await mock_client.get("/pixel.gif", headers={"User-Agent": CAMO_USER_AGENT})
        mock_store.fail_writes = False
        succeeded = await mock_client.get("/pixel.gif", headers={"User-Agent": CAMO_USER_AGENT})

        assert failed.status_code == 500
        assert succeeded.status_code == 200
        assert len(mock_store.events) == 1

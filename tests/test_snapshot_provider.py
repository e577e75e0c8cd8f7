"""Unit tests for snapshot providers."""
import asyncio

import httpx
import pytest
from unittest.mock import AsyncMock, Mock

from app.exceptions import DataUnavailableError
from app.models import RestaurantDataResponse
from app.services import CachedSnapshotProvider, StaticSnapshotProvider

from conftest import make_deal, make_restaurant


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_client():
    """Create mock deals feed client."""
    client = Mock()
    client.url = "https://feed.example.com/deals.json"
    client.fetch_restaurants = AsyncMock(
        return_value=RestaurantDataResponse(
            restaurants=[make_restaurant(deals=[make_deal("D1")])]
        )
    )
    return client


@pytest.fixture
def provider(mock_client, clock):
    return CachedSnapshotProvider(mock_client, ttl_seconds=60, clock=clock)


class TestStaticSnapshotProvider:
    """Test StaticSnapshotProvider."""

    @pytest.mark.asyncio
    async def test_returns_immutable_snapshot(self):
        restaurants = [make_restaurant(object_id="R1")]
        provider = StaticSnapshotProvider(restaurants)

        restaurants.append(make_restaurant(object_id="R2"))
        snapshot = await provider.get_dataset()

        assert isinstance(snapshot, tuple)
        assert [r.objectId for r in snapshot] == ["R1"]


class TestCachedSnapshotProvider:
    """Test TTL caching, refresh and error classification."""

    @pytest.mark.asyncio
    async def test_first_call_fetches(self, provider, mock_client):
        snapshot = await provider.get_dataset()

        assert len(snapshot) == 1
        assert isinstance(snapshot, tuple)
        mock_client.fetch_restaurants.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cached_within_ttl(self, provider, mock_client, clock):
        first = await provider.get_dataset()
        clock.now += 59
        second = await provider.get_dataset()

        assert first is second
        assert mock_client.fetch_restaurants.await_count == 1
        assert provider.snapshot_age_seconds() == pytest.approx(59)

    @pytest.mark.asyncio
    async def test_refetches_after_ttl(self, provider, mock_client, clock):
        first = await provider.get_dataset()
        clock.now += 60
        second = await provider.get_dataset()

        assert mock_client.fetch_restaurants.await_count == 2
        assert first is not second
        assert provider.snapshot_age_seconds() == 0

    @pytest.mark.asyncio
    async def test_refresh_ignores_ttl(self, provider, mock_client):
        await provider.get_dataset()
        await provider.refresh()

        assert mock_client.fetch_restaurants.await_count == 2

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_fetch(self, provider, mock_client):
        results = await asyncio.gather(*(provider.get_dataset() for _ in range(5)))

        assert mock_client.fetch_restaurants.await_count == 1
        assert all(r is results[0] for r in results)

    @pytest.mark.asyncio
    async def test_old_snapshot_untouched_by_refresh(self, provider, mock_client):
        held = await provider.get_dataset()
        mock_client.fetch_restaurants.return_value = RestaurantDataResponse(
            restaurants=[make_restaurant(object_id="R2"), make_restaurant(object_id="R3")]
        )

        await provider.refresh()

        assert len(held) == 1
        assert len(provider.current) == 2

    @pytest.mark.asyncio
    async def test_transport_error_is_data_unavailable(self, provider, mock_client):
        mock_client.fetch_restaurants.side_effect = httpx.ConnectError("refused")

        with pytest.raises(DataUnavailableError):
            await provider.get_dataset()

    @pytest.mark.asyncio
    async def test_invalid_payload_is_data_unavailable(self, provider, mock_client):
        mock_client.fetch_restaurants.side_effect = ValueError("not json")

        with pytest.raises(DataUnavailableError):
            await provider.get_dataset()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("restaurants", [None, []])
    async def test_empty_payload_is_data_unavailable(self, provider, mock_client, restaurants):
        mock_client.fetch_restaurants.return_value = RestaurantDataResponse(
            restaurants=restaurants
        )

        with pytest.raises(DataUnavailableError) as exc_info:
            await provider.get_dataset()
        assert "No data received" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_previous_snapshot(self, provider, mock_client, clock):
        first = await provider.get_dataset()
        mock_client.fetch_restaurants.side_effect = httpx.ReadTimeout("slow")

        with pytest.raises(DataUnavailableError):
            await provider.refresh()

        assert provider.current is first

    def test_age_is_none_before_first_fetch(self, provider):
        assert provider.snapshot_age_seconds() is None
        assert provider.current is None

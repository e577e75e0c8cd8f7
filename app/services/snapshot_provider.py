"""Restaurant snapshot providers.

A snapshot is an immutable tuple of Restaurant models. Queries get a
reference to the current tuple; a refresh builds a new tuple and swaps the
reference, so a query never sees a half-updated dataset.
"""
import asyncio
import logging
import time
from typing import Callable, Iterable, Optional, Protocol

import httpx
from pydantic import ValidationError

from app.api.deals_client import DealsAPIClient
from app.exceptions import DataUnavailableError
from app.models import Restaurant
from app.metrics import (
    SNAPSHOT_REQUESTS_TOTAL,
    SNAPSHOT_RESTAURANTS,
    SNAPSHOT_DEALS,
    SNAPSHOT_LAST_REFRESH_TIMESTAMP,
)

logger = logging.getLogger(__name__)

Snapshot = tuple[Restaurant, ...]


class SnapshotProvider(Protocol):
    """Anything that can hand out the current restaurant snapshot."""

    async def get_dataset(self) -> Snapshot:
        ...


class StaticSnapshotProvider:
    """Serves a fixed snapshot. Used for tests and offline runs."""

    def __init__(self, restaurants: Iterable[Restaurant]):
        self._snapshot: Snapshot = tuple(restaurants)

    @property
    def current(self) -> Snapshot:
        return self._snapshot

    async def get_dataset(self) -> Snapshot:
        return self._snapshot


class CachedSnapshotProvider:
    """Fetches the upstream feed and caches it for a fixed TTL."""

    def __init__(
        self,
        client: DealsAPIClient,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize cached provider.

        Args:
            client: Upstream deals feed client
            ttl_seconds: How long a fetched snapshot stays fresh
            clock: Monotonic time source, injectable for tests
        """
        self.client = client
        self.ttl_seconds = ttl_seconds
        self._clock = clock

        self._snapshot: Optional[Snapshot] = None
        self._fetched_at: float = 0.0
        self._lock = asyncio.Lock()

    def _is_fresh(self) -> bool:
        return (
            self._snapshot is not None
            and (self._clock() - self._fetched_at) < self.ttl_seconds
        )

    def snapshot_age_seconds(self) -> Optional[float]:
        """Age of the cached snapshot, or None if nothing was fetched yet."""
        if self._snapshot is None:
            return None
        return self._clock() - self._fetched_at

    @property
    def current(self) -> Optional[Snapshot]:
        """The cached snapshot without triggering a fetch."""
        return self._snapshot

    async def get_dataset(self) -> Snapshot:
        """Return the cached snapshot, refreshing it if it has expired.

        Raises:
            DataUnavailableError: If a refresh was needed and failed
        """
        snapshot = self._snapshot
        if self._is_fresh():
            SNAPSHOT_REQUESTS_TOTAL.labels(result="hit").inc()
            logger.debug(
                f"[SnapshotProvider] Returning cached data "
                f"(age: {self.snapshot_age_seconds():.1f}s)"
            )
            return snapshot

        async with self._lock:
            # Another caller may have refreshed while we waited
            if self._is_fresh():
                SNAPSHOT_REQUESTS_TOTAL.labels(result="hit").inc()
                return self._snapshot

            SNAPSHOT_REQUESTS_TOTAL.labels(result="miss").inc()
            return await self._fetch()

    async def refresh(self) -> Snapshot:
        """Force a fetch regardless of TTL.

        Raises:
            DataUnavailableError: If the fetch failed
        """
        async with self._lock:
            return await self._fetch()

    async def _fetch(self) -> Snapshot:
        """Fetch from upstream and swap in the new snapshot. Caller holds the lock."""
        logger.info(f"[SnapshotProvider] Fetching restaurant data from: {self.client.url}")

        try:
            response = await self.client.fetch_restaurants()
        except httpx.HTTPError as e:
            raise DataUnavailableError(
                f"Failed to fetch restaurant data from external API: {e}"
            ) from e
        except (ValidationError, ValueError) as e:
            raise DataUnavailableError(
                f"Invalid restaurant data received from external API: {e}"
            ) from e

        if not response.restaurants:
            raise DataUnavailableError("No data received from external API")

        snapshot: Snapshot = tuple(response.restaurants)
        self._snapshot = snapshot
        self._fetched_at = self._clock()

        deal_count = sum(len(r.deals) for r in snapshot)
        SNAPSHOT_RESTAURANTS.set(len(snapshot))
        SNAPSHOT_DEALS.set(deal_count)
        SNAPSHOT_LAST_REFRESH_TIMESTAMP.set_to_current_time()

        logger.info(
            f"[SnapshotProvider] Cached {len(snapshot)} restaurants "
            f"with {deal_count} deals"
        )
        return snapshot

"""Deal queries: active deals at a time of day and the peak deal window."""
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from app.models import (
    ActiveDealRecord,
    Deal,
    Restaurant,
    TimeOfDay,
    parse_time,
    format_twelve_hour,
    is_time_within_range,
    MINUTES_PER_DAY,
)
from app.metrics import ACTIVE_DEALS_RETURNED, PEAK_WINDOW_DEAL_COUNT
from app.services.snapshot_provider import SnapshotProvider
from app.services.window_resolver import resolve_effective_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeakWindow:
    """First contiguous run of minutes at the day's maximum deal count."""

    start: int
    end: int
    deal_count: int

    @property
    def start_text(self) -> str:
        return format_twelve_hour(TimeOfDay.from_minutes(self.start))

    @property
    def end_text(self) -> str:
        return format_twelve_hour(TimeOfDay.from_minutes(self.end))


def build_active_deal_record(restaurant: Restaurant, deal: Deal) -> ActiveDealRecord:
    """Flatten a restaurant/deal pair into the public record shape."""
    return ActiveDealRecord(
        restaurantObjectId=restaurant.objectId,
        restaurantName=restaurant.name,
        restaurantAddress1=restaurant.address1,
        restarantSuburb=restaurant.suburb,
        restaurantOpen=restaurant.open,
        restaurantClose=restaurant.close,
        dealObjectId=deal.objectId,
        discount=deal.discount,
        dineIn=deal.dineIn,
        lightning=deal.lightning,
        qtyLeft=deal.qtyLeft,
    )


def find_active_deals(
    restaurants: Iterable[Restaurant], query: TimeOfDay
) -> list[ActiveDealRecord]:
    """Return every deal active at the query time.

    A deal is active when its restaurant is open at the query time and the
    query time falls within the deal's effective window. Output keeps the
    dataset order: restaurants in order, then each restaurant's deals.

    Raises:
        InvalidTimeFormatError: If any restaurant or deal hours fail to parse
    """
    active: list[ActiveDealRecord] = []

    for restaurant in restaurants:
        restaurant_open = parse_time(restaurant.open)
        restaurant_close = parse_time(restaurant.close)

        if not is_time_within_range(query, restaurant_open, restaurant_close):
            logger.debug(
                f"[DealService] Restaurant {restaurant.name} is closed at {query}"
            )
            continue

        for deal in restaurant.deals:
            window = resolve_effective_window(deal, restaurant_open, restaurant_close)
            if is_time_within_range(query, window.open, window.close):
                active.append(build_active_deal_record(restaurant, deal))

    return active


def build_concurrency_histogram(restaurants: Iterable[Restaurant]) -> list[int]:
    """Count simultaneously active deals for every minute of the day.

    Each deal contributes +1 to every minute of its effective window,
    inclusive at both ends. Windows that come out inverted after clipping
    (open after close) contribute nothing.

    Returns:
        List of MINUTES_PER_DAY counts, index = minute since midnight
    """
    # Difference array: +1 at window start, -1 one past window end
    diff = [0] * (MINUTES_PER_DAY + 1)

    for restaurant in restaurants:
        restaurant_open = parse_time(restaurant.open)
        restaurant_close = parse_time(restaurant.close)

        for deal in restaurant.deals:
            window = resolve_effective_window(deal, restaurant_open, restaurant_close)
            if window.wraps_midnight:
                logger.warning(
                    f"[DealService] Skipping inverted window {window} for "
                    f"deal={deal.objectId} restaurant={restaurant.objectId}"
                )
                continue
            diff[window.open] += 1
            diff[window.close + 1] -= 1

    histogram: list[int] = []
    running = 0
    for minute in range(MINUTES_PER_DAY):
        running += diff[minute]
        histogram.append(running)
    return histogram


def find_first_peak_run(histogram: Sequence[int]) -> tuple[int, int, int]:
    """Find the first contiguous run of buckets at the global maximum.

    Scanning stops as soon as the first maximal run ends, so a later run at
    the same count is never returned even if it is longer.

    Returns:
        (start_minute, end_minute, max_count). An all-zero histogram yields
        (0, 0, 0).
    """
    max_count = max(histogram, default=0)

    # No deals at all: report midnight-midnight rather than the whole day
    if max_count == 0:
        return 0, 0, 0

    peak_start = -1
    peak_end = -1
    for minute, count in enumerate(histogram):
        if count == max_count:
            if peak_start == -1:
                peak_start = minute
            peak_end = minute
        elif peak_start != -1:
            break

    return peak_start, peak_end, max_count


def compute_peak_window(restaurants: Iterable[Restaurant]) -> PeakWindow:
    histogram = build_concurrency_histogram(restaurants)
    start, end, count = find_first_peak_run(histogram)
    return PeakWindow(start=start, end=end, deal_count=count)


class DealService:
    """Runs deal queries against the current restaurant snapshot."""

    def __init__(self, snapshot_provider: SnapshotProvider):
        """Initialize deal service.

        Args:
            snapshot_provider: Source of the current immutable restaurant snapshot
        """
        self.snapshot_provider = snapshot_provider

    async def get_active_deals(self, time_text: str) -> list[ActiveDealRecord]:
        """Get all deals active at a time of day.

        Args:
            time_text: Query time, e.g. "3:00pm", "15:00"

        Returns:
            Active deals in dataset order (possibly empty)

        Raises:
            InvalidTimeFormatError: If time_text (or snapshot hours) cannot be parsed
            DataUnavailableError: If no snapshot could be obtained
        """
        # Parse before fetching so bad input never reaches upstream
        query = parse_time(time_text)
        logger.info(
            f"[DealService] Querying active deals at {time_text!r} (parsed as {query})"
        )

        restaurants = await self.snapshot_provider.get_dataset()
        active = find_active_deals(restaurants, query)
        ACTIVE_DEALS_RETURNED.observe(len(active))

        logger.info(f"[DealService] Found {len(active)} active deals at {time_text!r}")
        return active

    async def get_peak_window(self) -> PeakWindow:
        """Get the first time window with the most simultaneously active deals."""
        restaurants = await self.snapshot_provider.get_dataset()
        peak = compute_peak_window(restaurants)
        PEAK_WINDOW_DEAL_COUNT.set(peak.deal_count)

        logger.info(
            f"[DealService] Peak time window: {peak.start_text} to {peak.end_text} "
            f"with {peak.deal_count} active deals"
        )
        return peak

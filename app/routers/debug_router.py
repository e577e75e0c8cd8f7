"""Debug routes for investigating the restaurant snapshot."""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from app.exceptions import DataUnavailableError, InvalidTimeFormatError
from app.models import parse_time
from app.services import resolve_effective_window

logger = logging.getLogger(__name__)

# Create router at module level
router = APIRouter(prefix="/debug", tags=["debug"])

# Global references - set during startup
_snapshot_provider = None


def set_debug_dependencies(snapshot_provider):
    """Set the dependencies for debug routes (called during startup)."""
    global _snapshot_provider
    _snapshot_provider = snapshot_provider
    logger.info("[DebugRouter] Dependencies injected")


class SnapshotInfo(BaseModel):
    """Summary of the cached snapshot."""
    cached: bool
    age_seconds: Optional[float] = None
    ttl_seconds: Optional[float] = None
    restaurants: int = 0
    deals: int = 0


class DealWindowInfo(BaseModel):
    """A deal with its raw and resolved time window."""
    deal_id: Optional[str] = None
    raw_open: Optional[str] = None
    raw_close: Optional[str] = None
    raw_start: Optional[str] = None
    raw_end: Optional[str] = None
    effective_window: Optional[str] = None
    wraps_midnight: Optional[bool] = None
    error: Optional[str] = None


class RestaurantDebugInfo(BaseModel):
    """A restaurant with every deal's resolved window."""
    restaurant_id: Optional[str] = None
    name: str
    suburb: Optional[str] = None
    open: str
    close: str
    deals: list[DealWindowInfo]
    error: Optional[str] = None


class RestaurantSearchResult(BaseModel):
    """Search results for restaurant lookup."""
    query: str
    total_restaurants: int
    matches_found: int
    restaurants: list[RestaurantDebugInfo]


@router.get(
    "/snapshot",
    response_model=SnapshotInfo,
    summary="Snapshot status",
    description="Show whether a snapshot is cached, its age and its size (never fetches)",
)
def snapshot_info() -> SnapshotInfo:
    """Describe the cached snapshot without triggering a fetch."""
    current = getattr(_snapshot_provider, "current", None)
    if current is None:
        return SnapshotInfo(cached=False)

    return SnapshotInfo(
        cached=True,
        age_seconds=(
            _snapshot_provider.snapshot_age_seconds()
            if hasattr(_snapshot_provider, "snapshot_age_seconds")
            else None
        ),
        ttl_seconds=getattr(_snapshot_provider, "ttl_seconds", None),
        restaurants=len(current),
        deals=sum(len(r.deals) for r in current),
    )


@router.get(
    "/restaurants/search",
    response_model=RestaurantSearchResult,
    summary="Search restaurants by name",
    description="Search restaurants (case-insensitive partial match) and show each deal's effective window",
)
async def search_restaurants(
    name: str = Query(..., description="Restaurant name to search for (partial match)"),
) -> RestaurantSearchResult:
    """Search for restaurants by name and resolve their deal windows."""
    if _snapshot_provider is None:
        return RestaurantSearchResult(
            query=name, total_restaurants=0, matches_found=0, restaurants=[]
        )

    try:
        restaurants = await _snapshot_provider.get_dataset()
    except DataUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))

    search_lower = name.lower()
    matches: list[RestaurantDebugInfo] = []

    for restaurant in restaurants:
        if search_lower not in restaurant.name.lower():
            continue

        info = RestaurantDebugInfo(
            restaurant_id=restaurant.objectId,
            name=restaurant.name,
            suburb=restaurant.suburb,
            open=restaurant.open,
            close=restaurant.close,
            deals=[],
        )

        try:
            restaurant_open = parse_time(restaurant.open)
            restaurant_close = parse_time(restaurant.close)
        except InvalidTimeFormatError as e:
            info.error = str(e)
            matches.append(info)
            continue

        for deal in restaurant.deals:
            deal_info = DealWindowInfo(
                deal_id=deal.objectId,
                raw_open=deal.open,
                raw_close=deal.close,
                raw_start=deal.start,
                raw_end=deal.end,
            )
            try:
                window = resolve_effective_window(deal, restaurant_open, restaurant_close)
                deal_info.effective_window = str(window)
                deal_info.wraps_midnight = window.wraps_midnight
            except InvalidTimeFormatError as e:
                deal_info.error = str(e)
            info.deals.append(deal_info)

        matches.append(info)

    logger.info(f"[DebugRouter] Search {name!r}: {len(matches)} matches")

    return RestaurantSearchResult(
        query=name,
        total_restaurants=len(restaurants),
        matches_found=len(matches),
        restaurants=matches,
    )

"""Data models package for the deals server."""
from app.models.restaurant import (
    Deal,
    Restaurant,
    RestaurantDataResponse,
)
from app.models.deal_response import (
    ActiveDealRecord,
    DealsListResponse,
    PeakTimeResponse,
)
from app.models.time_of_day import (
    TimeOfDay,
    parse_time,
    to_minutes,
    from_minutes,
    format_twelve_hour,
    is_time_within_range,
    MINUTES_PER_DAY,
)

__all__ = [
    # Upstream models
    "Deal",
    "Restaurant",
    "RestaurantDataResponse",
    # API response models
    "ActiveDealRecord",
    "DealsListResponse",
    "PeakTimeResponse",
    # Time of day
    "TimeOfDay",
    "parse_time",
    "to_minutes",
    "from_minutes",
    "format_twelve_hour",
    "is_time_within_range",
    "MINUTES_PER_DAY",
]

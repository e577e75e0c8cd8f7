"""Effective active-window resolution for deals.

A deal's effective window is its own time window when it has one, falling
back to the restaurant's hours field by field, then clipped to the
restaurant's operating hours.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from app.models import Deal, TimeOfDay, parse_time, format_twelve_hour

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EffectiveWindow:
    """A deal's resolved window, in minutes since midnight."""

    open: int
    close: int

    @property
    def wraps_midnight(self) -> bool:
        return self.open > self.close

    def __str__(self) -> str:
        return (
            f"{format_twelve_hour(TimeOfDay.from_minutes(self.open))}-"
            f"{format_twelve_hour(TimeOfDay.from_minutes(self.close))}"
        )


def select_deal_times(deal: Deal) -> tuple[Optional[str], Optional[str]]:
    """Pick the deal's own open/close text.

    open wins over start and close wins over end. Each side is chosen
    independently; None means "use the restaurant's hours".
    """
    deal_open = deal.open if deal.open is not None else deal.start
    deal_close = deal.close if deal.close is not None else deal.end
    return deal_open, deal_close


def clip_to_restaurant_hours(
    open_minutes: int,
    close_minutes: int,
    restaurant_open_minutes: int,
    restaurant_close_minutes: int,
) -> tuple[int, int]:
    """Intersect a window with restaurant hours using plain max/min.

    NOTE: This is a literal integer clip. It does not re-derive a correct
    intersection when either window crosses midnight: a 7pm-9pm deal at a
    restaurant open 6pm-2am comes out as 7pm-2am (1140/120). Callers go
    through this function so a wrap-aware intersection can replace it in
    one place.
    """
    return (
        max(open_minutes, restaurant_open_minutes),
        min(close_minutes, restaurant_close_minutes),
    )


def resolve_effective_window(
    deal: Deal,
    restaurant_open: TimeOfDay,
    restaurant_close: TimeOfDay,
) -> EffectiveWindow:
    """Resolve a deal's effective window against its restaurant's hours.

    Args:
        deal: Deal to resolve
        restaurant_open: Parsed restaurant opening time
        restaurant_close: Parsed restaurant closing time

    Returns:
        EffectiveWindow in minutes since midnight. open > close is possible
        and is left for the caller to interpret.

    Raises:
        InvalidTimeFormatError: If the deal's own times cannot be parsed
    """
    deal_open_text, deal_close_text = select_deal_times(deal)

    candidate_open = (
        parse_time(deal_open_text) if deal_open_text is not None else restaurant_open
    )
    candidate_close = (
        parse_time(deal_close_text) if deal_close_text is not None else restaurant_close
    )

    open_minutes, close_minutes = clip_to_restaurant_hours(
        candidate_open.minutes,
        candidate_close.minutes,
        restaurant_open.minutes,
        restaurant_close.minutes,
    )

    logger.debug(
        f"[WindowResolver] deal={deal.objectId} candidate="
        f"{candidate_open}-{candidate_close} restaurant="
        f"{restaurant_open}-{restaurant_close} effective={open_minutes}/{close_minutes}"
    )

    return EffectiveWindow(open=open_minutes, close=close_minutes)

"""Deal handler for HTTP requests."""
import logging
import time

from app.models import DealsListResponse, PeakTimeResponse
from app.services import DealService

logger = logging.getLogger(__name__)


class DealHandler:
    """Handler for deal-related HTTP requests."""

    def __init__(self, deal_service: DealService):
        """Initialize deal handler.

        Args:
            deal_service: Service running deal queries over the snapshot
        """
        self.deal_service = deal_service

    async def get_active_deals(self, time_of_day: str) -> DealsListResponse:
        """Get all deals active at a time of day.

        Args:
            time_of_day: Query time, e.g. "3:00pm", "6:00pm", "15:00"

        Returns:
            DealsListResponse with the active deals (possibly empty)
        """
        logger.info(f"[DealHandler] GetActiveDeals: timeOfDay={time_of_day!r}")
        start_time = time.perf_counter()

        deals = await self.deal_service.get_active_deals(time_of_day)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"[DealHandler] GET /api/deals?timeOfDay={time_of_day} - "
            f"{len(deals)} deals, response time: {elapsed_ms:.1f} ms"
        )
        return DealsListResponse(deals=deals)

    async def get_peak_time(self) -> PeakTimeResponse:
        """Get the peak window when the most deals are available."""
        logger.info("[DealHandler] GetPeakTime")
        start_time = time.perf_counter()

        peak = await self.deal_service.get_peak_window()

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"[DealHandler] GET /api/deals/peak-time - response time: {elapsed_ms:.1f} ms"
        )
        return PeakTimeResponse(peakTimeStart=peak.start_text, peakTimeEnd=peak.end_text)

    def ping(self) -> dict[str, str]:
        """Health check endpoint.

        Returns:
            {"status": "pong"}
        """
        logger.debug("[DealHandler] Ping")
        return {"status": "pong"}

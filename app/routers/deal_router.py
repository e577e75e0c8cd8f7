"""FastAPI routes for deal endpoints."""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Query

from app.exceptions import DataUnavailableError, InvalidTimeFormatError
from app.models import DealsListResponse, PeakTimeResponse

logger = logging.getLogger(__name__)

# Create router at module level
router = APIRouter()

# Global handler reference - set during startup
_deal_handler = None


def set_deal_handler(handler):
    """Set the deal handler instance (called during startup)."""
    global _deal_handler
    _deal_handler = handler
    logger.info("[DealRouter] Handler injected successfully")


def get_handler():
    """Get the deal handler, raising error if not initialized."""
    if _deal_handler is None:
        raise HTTPException(
            status_code=503,
            detail=error_detail(503, "Service Unavailable", "Service not ready"),
        )
    return _deal_handler


def error_detail(status: int, error: str, message: str) -> dict:
    """Build the error body shared by all deal endpoints."""
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status,
        "error": error,
        "message": message,
    }


def _to_http_exception(e: Exception) -> HTTPException:
    if isinstance(e, InvalidTimeFormatError):
        return HTTPException(
            status_code=400, detail=error_detail(400, "Bad Request", str(e))
        )
    if isinstance(e, DataUnavailableError):
        return HTTPException(
            status_code=503, detail=error_detail(503, "Service Unavailable", str(e))
        )
    return HTTPException(
        status_code=500,
        detail=error_detail(500, "Internal Server Error", "An unexpected error occurred"),
    )


@router.get(
    "/api/deals",
    response_model=DealsListResponse,
    summary="Get active deals",
    description="Get all deals active at a given time of day (e.g. 3:00pm, 15:00)",
)
async def get_active_deals(
    time_of_day: str = Query(
        ...,
        alias="timeOfDay",
        description="Time of day, 12-hour (3:00pm) or 24-hour (15:00)",
    ),
) -> DealsListResponse:
    """Get all deals active at the given time of day."""
    handler = get_handler()
    try:
        return await handler.get_active_deals(time_of_day)
    except (InvalidTimeFormatError, DataUnavailableError) as e:
        logger.warning(f"[DealRouter] get_active_deals({time_of_day!r}) rejected: {e}")
        raise _to_http_exception(e)
    except Exception as e:
        logger.error(f"[DealRouter] Error in get_active_deals: {e}")
        raise _to_http_exception(e)


@router.get(
    "/api/deals/peak-time",
    response_model=PeakTimeResponse,
    summary="Get peak deal window",
    description="Get the time window during which the most deals are available",
)
async def get_peak_time() -> PeakTimeResponse:
    """Get the peak deal availability window."""
    handler = get_handler()
    try:
        return await handler.get_peak_time()
    except (InvalidTimeFormatError, DataUnavailableError) as e:
        logger.warning(f"[DealRouter] get_peak_time rejected: {e}")
        raise _to_http_exception(e)
    except Exception as e:
        logger.error(f"[DealRouter] Error in get_peak_time: {e}")
        raise _to_http_exception(e)


@router.get(
    "/ping",
    summary="Health check",
    description="Health check endpoint",
)
def ping() -> dict[str, str]:
    """Health check endpoint."""
    handler = get_handler()
    return handler.ping()

"""Unit tests for handlers."""
import pytest
from unittest.mock import AsyncMock, Mock

from app.exceptions import InvalidTimeFormatError
from app.handlers import DealHandler
from app.models import ActiveDealRecord, DealsListResponse, PeakTimeResponse
from app.services import PeakWindow


@pytest.fixture
def mock_deal_service():
    """Create mock deal service."""
    service = Mock()
    service.get_active_deals = AsyncMock()
    service.get_peak_window = AsyncMock()
    return service


@pytest.fixture
def deal_handler(mock_deal_service):
    """Create DealHandler with mocked service."""
    return DealHandler(mock_deal_service)


class TestDealHandler:
    """Test DealHandler response shaping."""

    def test_ping(self, deal_handler):
        assert deal_handler.ping() == {"status": "pong"}

    @pytest.mark.asyncio
    async def test_get_active_deals_wraps_list(self, deal_handler, mock_deal_service):
        records = [ActiveDealRecord(dealObjectId="D1"), ActiveDealRecord(dealObjectId="D2")]
        mock_deal_service.get_active_deals.return_value = records

        result = await deal_handler.get_active_deals("3:00pm")

        assert isinstance(result, DealsListResponse)
        assert [d.dealObjectId for d in result.deals] == ["D1", "D2"]
        mock_deal_service.get_active_deals.assert_awaited_once_with("3:00pm")

    @pytest.mark.asyncio
    async def test_get_active_deals_empty(self, deal_handler, mock_deal_service):
        mock_deal_service.get_active_deals.return_value = []

        result = await deal_handler.get_active_deals("4:00am")

        assert result.deals == []

    @pytest.mark.asyncio
    async def test_get_active_deals_propagates_validation_error(
        self, deal_handler, mock_deal_service
    ):
        mock_deal_service.get_active_deals.side_effect = InvalidTimeFormatError(
            "Invalid time format: 'xx'", time_text="xx"
        )

        with pytest.raises(InvalidTimeFormatError):
            await deal_handler.get_active_deals("xx")

    @pytest.mark.asyncio
    async def test_get_peak_time_formats_window(self, deal_handler, mock_deal_service):
        mock_deal_service.get_peak_window.return_value = PeakWindow(
            start=780, end=840, deal_count=2
        )

        result = await deal_handler.get_peak_time()

        assert result == PeakTimeResponse(peakTimeStart="1:00pm", peakTimeEnd="2:00pm")

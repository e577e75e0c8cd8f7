"""Unit tests for Pydantic data models."""
import pytest
from pydantic import ValidationError

from app.models import (
    ActiveDealRecord,
    Deal,
    DealsListResponse,
    PeakTimeResponse,
    Restaurant,
    RestaurantDataResponse,
)


class TestRestaurantModels:
    """Test upstream restaurant/deal models."""

    def test_payload_parses(self, sample_payload):
        response = RestaurantDataResponse(**sample_payload)

        assert len(response.restaurants) == 3
        masala = response.restaurants[0]
        assert masala.name == "Masala Kitchen"
        assert masala.cuisines == ("Indian", "Takeaway")
        assert len(masala.deals) == 2
        assert masala.deals[1].open == "3:00pm"

    def test_null_deals_become_empty(self, sample_payload):
        response = RestaurantDataResponse(**sample_payload)

        assert response.restaurants[2].deals == ()

    def test_missing_hours_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            Restaurant(name="No Hours", deals=[])

    def test_numbers_coerced_to_strings(self):
        deal = Deal(objectId=7, discount=20, qtyLeft=0, dineIn=True)

        assert deal.objectId == "7"
        assert deal.discount == "20"
        assert deal.qtyLeft == "0"
        assert deal.dineIn == "true"

    def test_models_are_frozen(self):
        deal = Deal(discount="10")

        with pytest.raises(ValidationError):
            deal.discount = "90"

    def test_unknown_fields_ignored(self):
        restaurant = Restaurant(open="9:00am", close="5:00pm", rating=4.5)

        assert not hasattr(restaurant, "rating")

    def test_missing_restaurants_key(self):
        assert RestaurantDataResponse().restaurants is None

    def test_restaurant_str(self):
        restaurant = Restaurant(name="Kekou", suburb="Richmond", open="1:00pm", close="11:00pm")

        assert str(restaurant) == (
            "Restaurant(name=Kekou, suburb=Richmond, open=1:00pm, close=11:00pm, deals=0)"
        )


class TestResponseModels:
    """Test API response models."""

    def test_active_deal_record_keeps_misspelled_suburb_key(self):
        record = ActiveDealRecord(restarantSuburb="Richmond")

        dumped = record.model_dump()
        assert dumped["restarantSuburb"] == "Richmond"
        assert "restaurantSuburb" not in dumped

    def test_active_deal_record_key_order(self):
        assert list(ActiveDealRecord.model_fields) == [
            "restaurantObjectId",
            "restaurantName",
            "restaurantAddress1",
            "restarantSuburb",
            "restaurantOpen",
            "restaurantClose",
            "dealObjectId",
            "discount",
            "dineIn",
            "lightning",
            "qtyLeft",
        ]

    def test_deals_list_defaults_empty(self):
        assert DealsListResponse().model_dump() == {"deals": []}

    def test_peak_time_response(self):
        response = PeakTimeResponse(peakTimeStart="1:00pm", peakTimeEnd="2:00pm")

        assert response.model_dump() == {"peakTimeStart": "1:00pm", "peakTimeEnd": "2:00pm"}

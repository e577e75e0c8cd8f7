"""Shared fixtures for deals server tests."""
import pytest

from app.models import Deal, Restaurant


def make_deal(object_id: str = "D1", **kwargs) -> Deal:
    """Build a Deal with sensible pass-through fields."""
    defaults = {
        "objectId": object_id,
        "discount": "50",
        "dineIn": "true",
        "lightning": "false",
        "qtyLeft": "5",
    }
    defaults.update(kwargs)
    return Deal(**defaults)


def make_restaurant(
    open: str = "11:00am",
    close: str = "10:00pm",
    deals: list[Deal] | None = None,
    object_id: str = "R1",
    name: str = "Test Restaurant",
    **kwargs,
) -> Restaurant:
    """Build a Restaurant open between the given hours."""
    return Restaurant(
        objectId=object_id,
        name=name,
        address1=kwargs.pop("address1", "1 Test St"),
        suburb=kwargs.pop("suburb", "Richmond"),
        open=open,
        close=close,
        deals=deals or [],
        **kwargs,
    )


@pytest.fixture
def sample_payload():
    """Upstream payload mixing open/close, start/end and inherited windows."""
    return {
        "restaurants": [
            {
                "objectId": "R-MASALA",
                "name": "Masala Kitchen",
                "address1": "55 Walsh Street",
                "suburb": "Lower East",
                "cuisines": ["Indian", "Takeaway"],
                "imageLink": "https://example.com/masala.jpg",
                "open": "3:00pm",
                "close": "9:00pm",
                "deals": [
                    {
                        "objectId": "D-MASALA-1",
                        "discount": "50",
                        "dineIn": "false",
                        "lightning": "true",
                        "qtyLeft": "5",
                    },
                    {
                        "objectId": "D-MASALA-2",
                        "discount": "40",
                        "dineIn": "true",
                        "lightning": "false",
                        "open": "3:00pm",
                        "close": "5:00pm",
                        "qtyLeft": "3",
                    },
                ],
            },
            {
                "objectId": "R-ABC",
                "name": "ABC Chicken",
                "address1": "361 Queen Street",
                "suburb": "Melbourne",
                "cuisines": ["Chicken"],
                "open": "12:00pm",
                "close": "11:00pm",
                "deals": [
                    {
                        "objectId": "D-ABC-1",
                        "discount": 30,
                        "dineIn": "false",
                        "lightning": "true",
                        "start": "4:00pm",
                        "end": "6:00pm",
                        "qtyLeft": 1,
                    }
                ],
            },
            {
                "objectId": "R-EMPTY",
                "name": "Quiet Cafe",
                "address1": "1 Side Lane",
                "suburb": "Carlton",
                "open": "7:00am",
                "close": "3:00pm",
                "deals": None,
            },
        ]
    }

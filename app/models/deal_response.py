"""Response models for the deals HTTP API."""
from pydantic import BaseModel, ConfigDict, Field


class ActiveDealRecord(BaseModel):
    """Flattened restaurant + deal projection returned for active deals.

    NOTE: "restarantSuburb" is misspelled on purpose. Existing clients
    depend on this exact key.
    """

    restaurantObjectId: str | None = None
    restaurantName: str | None = None
    restaurantAddress1: str | None = None
    restarantSuburb: str | None = None
    restaurantOpen: str | None = None
    restaurantClose: str | None = None
    dealObjectId: str | None = None
    discount: str | None = None
    dineIn: str | None = None
    lightning: str | None = None
    qtyLeft: str | None = None

    model_config = ConfigDict(frozen=True)


class DealsListResponse(BaseModel):
    """Wrapper for the active deals list."""

    deals: list[ActiveDealRecord] = Field(default_factory=list)


class PeakTimeResponse(BaseModel):
    """Peak deal availability window, as 12-hour time strings."""

    peakTimeStart: str
    peakTimeEnd: str

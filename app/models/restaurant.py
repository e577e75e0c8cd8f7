"""Restaurant and deal models for the upstream challenge-data payload."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _coerce_to_string(v: Any) -> Optional[str]:
    """Normalize scalar values to strings.

    The upstream feed mixes strings and numbers for the same fields (for
    example "qtyLeft": 5 vs "qtyLeft": "5"). Values are passed through
    opaquely, so everything is kept as a string.
    """
    if v is None or isinstance(v, str):
        return v
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, (int, float)):
        return str(v)
    return v


class Deal(BaseModel):
    """A single deal offered by a restaurant.

    A deal may carry its own time window as either open/close or
    start/end. When neither is present it runs for the restaurant's hours.
    """

    objectId: Optional[str] = None
    discount: Optional[str] = None
    dineIn: Optional[str] = None
    lightning: Optional[str] = None
    qtyLeft: Optional[str] = None

    open: Optional[str] = None
    close: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator(
        "objectId", "discount", "dineIn", "lightning", "qtyLeft",
        "open", "close", "start", "end",
        mode="before",
    )
    @classmethod
    def convert_scalars_to_string(cls, v: Any) -> Optional[str]:
        return _coerce_to_string(v)


class Restaurant(BaseModel):
    """A restaurant with its operating hours and deals."""

    objectId: Optional[str] = None
    name: str = ""
    address1: Optional[str] = None
    suburb: Optional[str] = None
    cuisines: tuple[str, ...] = ()
    imageLink: Optional[str] = None

    # Operating hours are mandatory; a missing value is a data error
    open: str
    close: str

    deals: tuple[Deal, ...] = ()

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator(
        "objectId", "address1", "suburb", "imageLink", "open", "close",
        mode="before",
    )
    @classmethod
    def convert_scalars_to_string(cls, v: Any) -> Optional[str]:
        return _coerce_to_string(v)

    @field_validator("name", mode="before")
    @classmethod
    def convert_name(cls, v: Any) -> str:
        if v is None:
            return ""
        return _coerce_to_string(v)

    @field_validator("cuisines", "deals", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """The feed sends null instead of an empty list for some restaurants."""
        if v is None:
            return ()
        return v

    def __str__(self) -> str:
        return (
            f"Restaurant(name={self.name}, suburb={self.suburb}, "
            f"open={self.open}, close={self.close}, deals={len(self.deals)})"
        )


class RestaurantDataResponse(BaseModel):
    """Top-level upstream payload: {"restaurants": [...]}."""

    restaurants: Optional[list[Restaurant]] = Field(default=None)

    model_config = ConfigDict(extra="ignore")

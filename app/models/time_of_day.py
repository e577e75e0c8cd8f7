"""Time-of-day value type with 12-hour/24-hour parsing and formatting.

Times are represented as minutes since midnight (0..1439). Two textual
forms are accepted:

- 12-hour with a meridiem marker: "3:00pm", "9:30AM", "12:00am" (midnight)
- 24-hour: "15:00", "3:00" (03:00)

Output is always the 12-hour lower-case form, e.g. "3:00pm".
"""
import re
from dataclasses import dataclass
from typing import Union

from app.exceptions import InvalidTimeFormatError

MINUTES_PER_DAY = 24 * 60

_TWELVE_HOUR_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(am|pm)$")
_TWENTY_FOUR_HOUR_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")

_EXPECTED_FORMAT_HINT = (
    "Expected format: 'H:MMam/pm' (e.g. '3:00pm') or 'HH:MM' (e.g. '15:00')"
)


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """A wall-clock time within a single day, minute precision."""

    hour: int
    minute: int

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour must be in [0, 23], got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute must be in [0, 59], got {self.minute}")

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute

    @classmethod
    def from_minutes(cls, minutes: int) -> "TimeOfDay":
        """Build a TimeOfDay from minutes since midnight (0..1439)."""
        if not 0 <= minutes < MINUTES_PER_DAY:
            raise ValueError(
                f"minutes must be in [0, {MINUTES_PER_DAY - 1}], got {minutes}"
            )
        return cls(hour=minutes // 60, minute=minutes % 60)

    def __str__(self) -> str:
        return format_twelve_hour(self)


TimeLike = Union[TimeOfDay, int]


def parse_time(text: str) -> TimeOfDay:
    """Parse a 12-hour or 24-hour time string.

    If the lower-cased text contains "am" or "pm" anywhere it is parsed as
    12-hour, otherwise as 24-hour.

    Args:
        text: Time string, e.g. "3:00pm", "3:00PM", "15:00", "3:00"

    Returns:
        Parsed TimeOfDay

    Raises:
        InvalidTimeFormatError: If the text is blank, malformed, or out of range
    """
    if text is None or not text.strip():
        raise InvalidTimeFormatError(
            f"Time string cannot be empty: '{text}'", time_text=text
        )

    normalized = text.strip().lower()

    if "am" in normalized or "pm" in normalized:
        match = _TWELVE_HOUR_PATTERN.match(normalized)
        if match is None:
            raise _invalid(text)
        hour, minute = int(match.group(1)), int(match.group(2))
        if not 1 <= hour <= 12 or minute > 59:
            raise _invalid(text)
        # 12am is midnight, 12pm is noon
        hour = hour % 12
        if match.group(3) == "pm":
            hour += 12
        return TimeOfDay(hour=hour, minute=minute)

    match = _TWENTY_FOUR_HOUR_PATTERN.match(normalized)
    if match is None:
        raise _invalid(text)
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise _invalid(text)
    return TimeOfDay(hour=hour, minute=minute)


def _invalid(text: str) -> InvalidTimeFormatError:
    return InvalidTimeFormatError(
        f"Invalid time format: '{text}'. {_EXPECTED_FORMAT_HINT}", time_text=text
    )


def to_minutes(time_of_day: TimeOfDay) -> int:
    return time_of_day.minutes


def from_minutes(minutes: int) -> TimeOfDay:
    return TimeOfDay.from_minutes(minutes)


def format_twelve_hour(time_of_day: TimeOfDay) -> str:
    """Render as "h:mma" with a lower-case meridiem, e.g. "3:00pm", "12:05am"."""
    meridiem = "am" if time_of_day.hour < 12 else "pm"
    hour = time_of_day.hour % 12 or 12
    return f"{hour}:{time_of_day.minute:02d}{meridiem}"


def _as_minutes(value: TimeLike) -> int:
    if isinstance(value, TimeOfDay):
        return value.minutes
    return value


def is_time_within_range(query: TimeLike, start: TimeLike, end: TimeLike) -> bool:
    """Check whether query falls in [start, end], both ends inclusive.

    A range whose start is after its end crosses midnight, e.g. 10pm-2am
    contains 11pm and 1am.
    """
    q, s, e = _as_minutes(query), _as_minutes(start), _as_minutes(end)
    if s <= e:
        return s <= q <= e
    return q >= s or q <= e

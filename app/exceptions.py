"""Exception types raised by the deals service."""


class DealsServiceError(Exception):
    """Base class for errors raised by the deals service."""


class InvalidTimeFormatError(DealsServiceError, ValueError):
    """Raised when a time-of-day string cannot be parsed.

    Covers both the caller's query time and restaurant/deal hours coming
    from the upstream snapshot.
    """

    def __init__(self, message: str, time_text: str | None = None):
        super().__init__(message)
        self.time_text = time_text


class DataUnavailableError(DealsServiceError):
    """Raised when no restaurant snapshot could be obtained from upstream."""

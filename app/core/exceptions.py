"""Domain errors raised by the booking managers.

All of them carry a human-readable message; the HTTP layer maps each kind to a
status code in app.main.
"""


class BookingError(Exception):
    """Base class for errors surfaced to the caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """Missing or malformed input, or a value outside its allowed range."""


class NotFoundError(BookingError):
    """A referenced business, service or appointment does not exist."""


class StoreError(BookingError):
    """The persistence layer failed (connectivity, constraint violation, timeout)."""

"""
exceptions.py
-------------
Domain errors raised by the booking services.

Each error carries the HTTP status the views answer with, so API and HTML
views translate them the same way.
"""


class BookingError(Exception):
    status_code = 400
    default_message = "The request could not be completed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(BookingError):
    """Missing or malformed input. Not retriable without changing it."""
    status_code = 400
    default_message = "Invalid request."


class NotFound(BookingError):
    status_code = 404
    default_message = "Not found."


class SlotUnavailable(BookingError):
    """The chosen time was taken. Safe to retry after re-reading slots."""
    status_code = 409
    default_message = "That time is no longer available. Please pick another time."


class CancellationNotAllowed(BookingError):
    status_code = 400
    default_message = "This booking can no longer be cancelled."


class StoreUnavailable(BookingError):
    """The database or blob store failed or rejected the operation."""
    status_code = 503
    default_message = "The booking service is temporarily unavailable."

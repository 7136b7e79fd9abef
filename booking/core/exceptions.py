"""
Scheduling error taxonomy.
Each kind maps to one HTTP status so callers can tell a taken time slot
apart from a validation failure.
"""


class BookingError(Exception):
    """Base exception for scheduling operations."""

    status_code = 400
    kind = "booking_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConflictError(BookingError):
    """Raised when a requested window overlaps an existing booking for the provider."""

    status_code = 409
    kind = "conflict"


class NotFoundError(BookingError):
    """Raised when a referenced record does not exist or belongs to another business."""

    status_code = 404
    kind = "not_found"


class InvalidInputError(BookingError):
    """Raised when a date range, time window or schedule definition is malformed."""

    status_code = 400
    kind = "invalid_input"

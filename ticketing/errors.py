"""Failures raised by the ticketing client.

Payload problems subclass ``ValueError`` and are raised before anything is
sent. Unsuccessful API envelopes raise ``ApiError``. Network and HTTP status
errors are ``httpx`` exceptions and are never wrapped.
"""


class PayloadError(ValueError):
    """An outbound payload could not be built."""


class UnparseableTimeError(PayloadError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unparseable show time: {value!r}")


class UnparseableDateError(PayloadError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unparseable show date: {value!r}")


class NoShowTimesError(PayloadError):
    def __init__(self):
        super().__init__(
            "At least one show time is required. "
            "Provide show_times_detailed or show_times + show_date."
        )


class MissingDateError(PayloadError):
    def __init__(self):
        super().__init__(
            "Show date is required for each show time. "
            "Give each entry a date or provide a top-level show_date."
        )


class MissingTimeError(PayloadError):
    def __init__(self):
        super().__init__("Show time is required for each show time entry.")


class EmptySeatSelectionError(PayloadError):
    def __init__(self):
        super().__init__("Select at least one seat.")


class SeatCountMismatchError(PayloadError):
    def __init__(self, declared: int, seats: int):
        self.declared = declared
        self.seats = seats
        super().__init__(
            f"Seat count mismatch: {declared} ticket(s) declared but {seats} seat(s) given"
        )


class ApiError(Exception):
    """The backend answered with ``success: false``."""

    def __init__(self, message: str | None, path: str | None = None):
        self.path = path
        super().__init__(message or "Request failed")


class AuthenticationError(ApiError):
    pass

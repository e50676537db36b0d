from typing import Any, List, Mapping, Union

from models import BookingRequest, BookingSelection
from ticketing.errors import EmptySeatSelectionError, SeatCountMismatchError


def parse_seat_numbers(value: Any) -> List[str]:
    """'A1, A2,,B3 ' -> ['A1', 'A2', 'B3']; sequences are trimmed the same way."""
    if value is None:
        return []
    parts = value.split(",") if isinstance(value, str) else value
    return [str(p).strip() for p in parts if p is not None and str(p).strip()]


def build_booking(selection: Union[BookingSelection, Mapping[str, Any]]) -> BookingRequest:
    """
    Validate a booking form and produce the outbound request.

    The ticket count is derived from the seats unless one is declared, in
    which case the two must agree.
    """
    if not isinstance(selection, BookingSelection):
        selection = BookingSelection.model_validate(selection)

    seats = parse_seat_numbers(selection.seat_numbers)
    if not seats:
        raise EmptySeatSelectionError()

    declared = selection.number_of_tickets
    if declared is not None and declared != len(seats):
        raise SeatCountMismatchError(declared, len(seats))

    return BookingRequest(
        movie_name=selection.movie_name.strip(),
        theatre_name=selection.theatre_name.strip(),
        number_of_tickets=len(seats),
        seat_numbers=seats,
    )

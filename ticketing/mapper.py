"""
Read-path normalization: raw backend records -> canonical entities.

The backend has renamed fields more than once (camelCase and snake_case
generations), so each logical field carries an ordered tuple of keys to try.
Mapping never raises; bad or missing values degrade to ``None`` / ``[]`` so
list views keep rendering.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from models import Movie, Ticket, User
from ticketing.temporal import normalize_timestamp

logger = logging.getLogger(__name__)

Keys = Tuple[str, ...]

MOVIE_KEYS: Dict[str, Keys] = {
    "id": ("id",),
    "movie_name": ("movieName", "movie_name"),
    "theatre_name": ("theatreName", "theatre_name"),
    "total_tickets": ("totalTickets", "total_tickets"),
    "available_tickets": ("availableTickets", "available_tickets"),
    "show_times": ("showTimes", "show_times"),
    "status": ("status",),
    "description": ("description",),
    "genre": ("genre",),
    "language": ("language",),
    "duration": ("duration",),
    "rating": ("rating",),
    "ticket_price": ("ticketPrice", "ticket_price"),
    "poster_url": ("posterUrl", "poster_url"),
    "release_date": ("releaseDate", "release_date"),
    "created_date": ("createdDate", "created_date", "createdAt", "created_at"),
    "modified_date": ("modifiedDate", "modified_date", "updatedAt", "updated_at"),
}

TICKET_KEYS: Dict[str, Keys] = {
    "id": ("id",),
    "movie_name": ("movieName", "movie_name"),
    "theatre_name": ("theatreName", "theatre_name"),
    "number_of_tickets": ("numberOfTickets", "number_of_tickets"),
    "seat_numbers": ("seatNumbers", "seat_numbers"),
    "user_id": ("userId", "user_id"),
    "user_login_id": ("userLoginId", "user_login_id"),
    "status": ("status",),
    "total_amount": ("totalAmount", "total_amount", "total_price"),
    "booking_reference": ("bookingReference", "booking_reference"),
    "booking_date": (
        "bookingDate", "booking_date", "bookedAt", "booked_at", "createdDate", "created_date",
    ),
    "created_date": ("createdDate", "created_date"),
    "modified_date": ("modifiedDate", "modified_date", "updatedAt", "updated_at"),
}

USER_KEYS: Dict[str, Keys] = {
    "login_id": ("loginId", "login_id"),
    "first_name": ("firstName", "first_name"),
    "last_name": ("lastName", "last_name"),
    "email": ("email",),
    "role": ("role",),
}

# Structured show-time entries, shared with the write path
SHOW_TIME_KEYS: Dict[str, Keys] = {
    "time": ("time", "show_time", "showTime"),
    "date": ("date", "show_date", "showDate"),
    "screen_number": ("screenNumber", "screen_number"),
}


def pick(raw: Any, keys: Keys) -> Any:
    """Return the value of the first key present (and not None) in ``raw``."""
    if not isinstance(raw, Mapping):
        return None
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None


def _number(value: Any) -> Any:
    if isinstance(value, (int, float, str)) and not isinstance(value, bool):
        return value
    return None


def _ident(value: Any) -> Any:
    if isinstance(value, (int, str)) and not isinstance(value, bool):
        return value
    return None


def show_time_display(entry: Any) -> Optional[str]:
    """Render one stored show time as ``"<date> <time>"`` (or the bare time)."""
    if isinstance(entry, str):
        return entry
    time = _text(pick(entry, SHOW_TIME_KEYS["time"]))
    date = _text(pick(entry, SHOW_TIME_KEYS["date"]))
    if not time:
        return None
    return f"{date} {time}" if date else time


def map_show_times(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    rendered = (show_time_display(entry) for entry in value)
    return [s for s in rendered if s]


def map_movie(raw: Any) -> Movie:
    if not isinstance(raw, Mapping):
        logger.warning("Expected a movie record, got %s", type(raw).__name__)
        return Movie()

    def get(field: str) -> Any:
        return pick(raw, MOVIE_KEYS[field])

    return Movie(
        id=_ident(get("id")),
        movie_name=_text(get("movie_name")),
        theatre_name=_text(get("theatre_name")),
        total_tickets=_int(get("total_tickets")),
        available_tickets=_int(get("available_tickets")),
        show_times=map_show_times(get("show_times")),
        status=_text(get("status")),
        description=_text(get("description")),
        genre=_text(get("genre")),
        language=_text(get("language")),
        duration=_int(get("duration")),
        rating=_number(get("rating")),
        ticket_price=_number(get("ticket_price")),
        poster_url=_text(get("poster_url")),
        release_date=_text(get("release_date")),
        created_date=_text(normalize_timestamp(get("created_date"))),
        modified_date=_text(normalize_timestamp(get("modified_date"))),
    )


def _seat_list(value: Any) -> List[str]:
    if isinstance(value, str):
        # older payloads stored seats as "A1,A2"
        return [s.strip() for s in value.split(",") if s.strip()]
    if isinstance(value, (list, tuple)):
        return [str(s) for s in value if s is not None]
    return []


def map_ticket(raw: Any) -> Ticket:
    if not isinstance(raw, Mapping):
        logger.warning("Expected a ticket record, got %s", type(raw).__name__)
        return Ticket()

    def get(field: str) -> Any:
        return pick(raw, TICKET_KEYS[field])

    return Ticket(
        id=_ident(get("id")),
        movie_name=_text(get("movie_name")),
        theatre_name=_text(get("theatre_name")),
        number_of_tickets=_int(get("number_of_tickets")),
        seat_numbers=_seat_list(get("seat_numbers")),
        user_id=_ident(get("user_id")),
        user_login_id=_text(get("user_login_id")),
        status=_text(get("status")),
        total_amount=_number(get("total_amount")),
        booking_reference=_text(get("booking_reference")),
        booking_date=_text(normalize_timestamp(get("booking_date"))) or "",
        created_date=_text(normalize_timestamp(get("created_date"))),
        modified_date=_text(normalize_timestamp(get("modified_date"))),
    )


def normalize_role(value: Any) -> str:
    role = (_text(value) or "USER").strip().upper()
    if role.startswith("ROLE_"):
        role = role[len("ROLE_"):]
    return role if role in ("USER", "ADMIN") else "USER"


def map_user(raw: Any, login_id: Optional[str] = None) -> User:
    """Build the session user from a login response; ``login_id`` is the fallback id."""
    def get(field: str) -> Any:
        return pick(raw, USER_KEYS[field])

    return User(
        login_id=_text(get("login_id")) or login_id or "",
        first_name=_text(get("first_name")) or "",
        last_name=_text(get("last_name")) or "",
        email=_text(get("email")) or "",
        role=normalize_role(get("role")),
    )

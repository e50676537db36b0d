"""
Write-path normalization for movies: show-time slots and the create body
sent to ``POST /admin/add``.

Unlike the mapper this module fails fast. Either every show time resolves
to a parsed time and date, or nothing is built.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from models import Movie, ShowTimeEntry, ShowTimeSlot, ShowTimesFormat
from ticketing.config import settings
from ticketing.errors import MissingDateError, MissingTimeError, NoShowTimesError
from ticketing.mapper import SHOW_TIME_KEYS, pick
from ticketing.temporal import parse_date, parse_time, split_display

logger = logging.getLogger(__name__)


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_or_empty(parser, value: Any) -> str:
    if _blank(value):
        return ""
    return parser(str(value))


def _entry_fields(entry: Any) -> Mapping[str, Any]:
    if isinstance(entry, ShowTimeEntry):
        return entry.model_dump()
    return entry if isinstance(entry, Mapping) else {}


def build_show_times(
        movie: Movie,
        detailed: Optional[Sequence[Any]] = None,
        show_date: Optional[str] = None,
) -> List[ShowTimeSlot]:
    """
    Build the validated show-time list for a movie.

    ``detailed`` entries (mappings or ``ShowTimeEntry``) win over the movie's
    plain ``show_times``; entries without a date take ``show_date``. When
    the arguments are omitted, a ``MovieDraft``'s own ``show_times_detailed``
    and ``show_date`` are used.
    """
    if detailed is None:
        detailed = getattr(movie, "show_times_detailed", None)
    if show_date is None:
        show_date = getattr(movie, "show_date", None)

    fallback_date = _parse_or_empty(parse_date, show_date)
    rows: List[Dict[str, Any]] = []

    if detailed:
        for entry in detailed:
            fields = _entry_fields(entry)
            raw_time = pick(fields, SHOW_TIME_KEYS["time"])
            raw_date = pick(fields, SHOW_TIME_KEYS["date"])
            row = {
                "time": _parse_or_empty(parse_time, raw_time),
                "date": _parse_or_empty(parse_date, raw_date) if not _blank(raw_date) else fallback_date,
            }
            screen = pick(fields, SHOW_TIME_KEYS["screen_number"])
            if screen is not None:
                row["screen_number"] = screen
            rows.append(row)
    else:
        for display in movie.show_times or []:
            embedded_date, raw_time = split_display(display)
            rows.append({
                "time": _parse_or_empty(parse_time, raw_time),
                "date": fallback_date or embedded_date or "",
            })

    for row in rows:
        row["time"] = row["time"].strip()
        row["date"] = row["date"].strip()

    if not rows:
        raise NoShowTimesError()
    if any(not row["date"] for row in rows):
        raise MissingDateError()
    if any(not row["time"] for row in rows):
        raise MissingTimeError()

    slots = [ShowTimeSlot(**row) for row in rows]
    logger.debug("Built %d show time(s) for %s", len(slots), movie.movie_name)
    return slots


def show_times_to_wire(
        slots: Sequence[ShowTimeSlot], fmt: Optional[ShowTimesFormat] = None
) -> List[Any]:
    fmt = fmt or settings.SHOW_TIMES_FORMAT
    if fmt == "flat":
        return [slot.display for slot in slots]
    return [slot.model_dump(exclude_none=True) for slot in slots]


def build_movie_payload(
        movie: Movie,
        *,
        movie_name: Optional[str] = None,
        theatre_name: Optional[str] = None,
        update: bool = False,
        fmt: Optional[ShowTimesFormat] = None,
) -> Dict[str, Any]:
    """
    Snake_case body for ``POST /admin/add``.

    Edits re-create the movie, and an edit form may carry only one of the two
    capacity fields; with ``update=True`` the missing one mirrors the other.
    """
    show_times = show_times_to_wire(build_show_times(movie), fmt)

    total = movie.total_tickets
    available = movie.available_tickets
    if update:
        total, available = (
            total if total is not None else available,
            available if available is not None else total,
        )

    payload = {
        "movie_name": movie_name or movie.movie_name,
        "theatre_name": theatre_name or movie.theatre_name,
        "total_tickets": total,
        "available_tickets": available,
        "show_times": show_times,
        "status": movie.status,
        "description": movie.description,
        "genre": movie.genre,
        "language": movie.language,
        "duration": movie.duration,
        "rating": movie.rating,
        "ticket_price": movie.ticket_price,
        "poster_url": movie.poster_url,
        "release_date": movie.release_date,
        "created_date": movie.created_date,
        "modified_date": movie.modified_date,
    }
    return {k: v for k, v in payload.items() if v is not None}

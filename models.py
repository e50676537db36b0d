from typing import Any, List, Literal, Optional, Union
from urllib.parse import quote
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Role = Literal["USER", "ADMIN"]
ShowTimesFormat = Literal["structured", "flat"]
Resource = Literal["movies", "tickets", "auth"]

# Ticket statuses are open-ended; only these two are recognised
CONFIRMED = "CONFIRMED"
CANCELLED = "CANCELLED"


class CanonicalModel(BaseModel):
    """Base for in-memory entities; dumps to the camelCase canonical shape."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Movie(CanonicalModel):
    id: Optional[Union[int, str]] = None
    movie_name: Optional[str] = None
    theatre_name: Optional[str] = None
    total_tickets: Optional[int] = None
    available_tickets: Optional[int] = None
    show_times: List[str] = Field(default_factory=list, description="'<date> <time>' or bare time")
    status: Optional[str] = None  # BOOK_ASAP, SOLD_OUT
    description: Optional[str] = None
    genre: Optional[str] = None
    language: Optional[str] = None
    duration: Optional[int] = None  # minutes
    rating: Optional[Union[float, str]] = None
    ticket_price: Optional[Union[float, str]] = None
    poster_url: Optional[str] = None
    release_date: Optional[str] = None
    created_date: Optional[str] = None
    modified_date: Optional[str] = None


class ShowTimeEntry(CanonicalModel):
    """Detailed show time as typed into an admin form; fields are free text."""

    time: Optional[str] = None
    date: Optional[str] = None
    screen_number: Optional[Union[int, str]] = None


class MovieDraft(Movie):
    """Movie being created or edited, with optional per-slot overrides."""

    show_times_detailed: List[ShowTimeEntry] = Field(default_factory=list)
    show_date: Optional[str] = None


class ShowTimeSlot(BaseModel):
    time: str = Field(..., pattern=r"^\d{2}:\d{2}:\d{2}$", description="HH:MM:SS, 24-hour")
    date: str = Field(..., min_length=1, description="YYYY-MM-DD")
    screen_number: Optional[Union[int, str]] = None

    @property
    def display(self) -> str:
        return f"{self.date} {self.time}"


class Ticket(CanonicalModel):
    id: Optional[Union[int, str]] = None
    movie_name: Optional[str] = None
    theatre_name: Optional[str] = None
    number_of_tickets: Optional[int] = None
    seat_numbers: List[str] = Field(default_factory=list)
    user_id: Optional[Union[int, str]] = None
    user_login_id: Optional[str] = None
    status: Optional[str] = None  # CONFIRMED, CANCELLED, ...
    total_amount: Optional[Union[float, str]] = None
    booking_reference: Optional[str] = None
    booking_date: str = ""
    created_date: Optional[str] = None
    modified_date: Optional[str] = None

    @property
    def is_cancelled(self) -> bool:
        return (self.status or "").upper() == CANCELLED

    @property
    def is_confirmed(self) -> bool:
        return (self.status or "").upper() == CONFIRMED

    @property
    def cancellation_key(self) -> Optional[str]:
        if self.booking_reference:
            return self.booking_reference
        return str(self.id) if self.id is not None else None


class BookingSelection(CanonicalModel):
    movie_name: str
    theatre_name: str
    seat_numbers: Union[str, List[str]] = ""  # e.g. "A1, A2" straight from the form
    number_of_tickets: Optional[int] = None


class BookingRequest(BaseModel):
    movie_name: str
    theatre_name: str
    number_of_tickets: int = Field(..., ge=1)
    seat_numbers: List[str]

    @property
    def path(self) -> str:
        return f"/{quote(self.movie_name, safe='')}/add"

    def to_wire(self) -> dict:
        return self.model_dump()


class User(CanonicalModel):
    login_id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    role: Role = "USER"


class RegisterRequest(CanonicalModel):
    first_name: str
    last_name: str
    email: str
    login_id: str
    password: str
    confirm_password: str
    contact_number: Optional[str] = None


class ApiEnvelope(BaseModel):
    success: bool = False
    message: Optional[str] = None
    data: Any = None
    timestamp: Optional[str] = None
    path: Optional[str] = None

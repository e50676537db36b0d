import asyncio

import httpx
import pytest

from models import BookingSelection, MovieDraft, RegisterRequest, Ticket
from ticketing.auth_service import AuthService
from ticketing.errors import ApiError, AuthenticationError, MissingDateError
from ticketing.movie_service import MovieService
from ticketing.service_registry import ServiceRegistry
from ticketing.ticket_service import TicketService


def run(coro):
    return asyncio.run(coro)


# --- movies ---

def test_get_all_movies_maps_each_record(api, backend):
    backend.on("GET", "/all", data=[
        {"movie_name": "Dune", "theatre_name": "PVR", "show_times": [{"time": "10:00:00", "date": "2025-01-01"}]},
        {"movieName": "Up", "theatreName": "INOX"},
    ])
    movies = run(MovieService(api).get_all_movies())
    assert [m.movie_name for m in movies] == ["Dune", "Up"]
    assert movies[0].show_times == ["2025-01-01 10:00:00"]


def test_non_list_data_gives_empty_list(api, backend):
    backend.on("GET", "/all", data={"unexpected": True})
    assert run(MovieService(api).get_all_movies()) == []


def test_search_movies_quotes_name(api, backend):
    backend.on("GET", "/movies/search/Dune Part Two", data=[{"movieName": "Dune Part Two"}])
    movies = run(MovieService(api).search_movies("Dune Part Two"))
    assert movies[0].movie_name == "Dune Part Two"
    assert backend.requests[0].url.raw_path == b"/movies/search/Dune%20Part%20Two"


def test_add_movie_posts_create_payload(api, backend):
    backend.on("POST", "/admin/add", data={
        "id": 1, "movie_name": "Dune", "theatre_name": "PVR",
        "show_times": [{"time": "10:00:00", "date": "2025-01-01"}],
    })
    draft = MovieDraft(
        movie_name="Dune", theatre_name="PVR", total_tickets=100, available_tickets=100,
        show_times_detailed=[{"time": "10:00 AM", "date": "2025-01-01", "screenNumber": 1}],
    )
    movie = run(MovieService(api, show_times_format="structured").add_movie(draft))

    method, path, body = backend.sent()
    assert (method, path) == ("POST", "/admin/add")
    assert body["show_times"] == [{"time": "10:00:00", "date": "2025-01-01", "screen_number": 1}]
    assert body["total_tickets"] == 100
    assert movie.id == 1
    assert movie.show_times == ["2025-01-01 10:00:00"]


def test_invalid_movie_is_never_sent(api, backend):
    with pytest.raises(MissingDateError):
        run(MovieService(api).add_movie(MovieDraft(movie_name="Dune", show_times=["10:00"])))
    assert backend.requests == []


def test_update_movie_deletes_then_recreates(api, backend):
    backend.on("DELETE", "/Dune/delete/PVR", data=None)
    backend.on("POST", "/admin/add", data={"movie_name": "Dune", "theatre_name": "PVR", "total_tickets": 40})
    changes = MovieDraft(available_tickets=40, show_times=["18:00"], show_date="2025-01-02")

    movie = run(MovieService(api, show_times_format="flat").update_movie("Dune", "PVR", changes))

    assert [(r.method, r.url.path) for r in backend.requests] == [
        ("DELETE", "/Dune/delete/PVR"), ("POST", "/admin/add"),
    ]
    body = backend.sent()[2]
    assert body["total_tickets"] == 40
    assert body["available_tickets"] == 40
    assert body["show_times"] == ["2025-01-02 18:00:00"]
    assert movie.total_tickets == 40


def test_failed_update_build_keeps_existing_movie(api, backend):
    with pytest.raises(MissingDateError):
        run(MovieService(api).update_movie("Dune", "PVR", MovieDraft(show_times=["18:00"])))
    assert backend.requests == []


def test_update_ticket_status(api, backend):
    backend.on("PUT", "/Dune/update/SOLD_OUT", data={"movieName": "Dune", "status": "SOLD_OUT"})
    movie = run(MovieService(api).update_ticket_status("Dune", "PVR", "SOLD_OUT"))
    assert movie.status == "SOLD_OUT"
    assert backend.requests[0].url.params["theatreName"] == "PVR"


def test_unsuccessful_envelope_raises_api_error(api, backend):
    backend.on("DELETE", "/Dune/delete/PVR", success=False, message="Movie not found")
    with pytest.raises(ApiError, match="Movie not found"):
        run(MovieService(api).delete_movie("Dune", "PVR"))


def test_non_json_reply_raises_api_error(api, backend):
    backend.on("GET", "/all", body="<html>gateway</html>")
    with pytest.raises(ApiError) as exc:
        run(MovieService(api).get_all_movies())
    assert exc.value.path == "/all"


def test_http_errors_propagate(api, backend):
    backend.on("GET", "/all", status=500, body={"error": "boom"})
    with pytest.raises(httpx.HTTPStatusError):
        run(MovieService(api).get_all_movies())
    assert len(backend.requests) == 1


# --- tickets ---

def test_book_ticket(api, backend):
    backend.on("POST", "/Dune/add", data={
        "id": 5, "movie_name": "Dune", "seat_numbers": ["A1", "A2"], "number_of_tickets": 2,
        "booking_reference": "BK-5", "status": "CONFIRMED", "booking_date": "2025-12-20T17:14:33.080783",
    })
    selection = BookingSelection(movie_name="Dune", theatre_name="PVR", seat_numbers="A1, A2")
    ticket = run(TicketService(api).book_ticket(selection))

    assert backend.sent() == ("POST", "/Dune/add", {
        "movie_name": "Dune", "theatre_name": "PVR", "number_of_tickets": 2, "seat_numbers": ["A1", "A2"],
    })
    assert ticket.booking_reference == "BK-5"
    assert ticket.booking_date == "2025-12-20T17:14:33.080"


def test_user_and_all_tickets(api, backend):
    backend.on("GET", "/tickets/user", data=[{"bookingReference": "BK-1"}])
    backend.on("GET", "/tickets/jdoe", data=[{"bookingReference": "BK-2"}, {"bookingReference": "BK-3"}])
    backend.on("GET", "/tickets/all", data=None)
    service = TicketService(api)

    assert [t.booking_reference for t in run(service.get_user_tickets())] == ["BK-1"]
    assert len(run(service.get_user_tickets("jdoe"))) == 2
    assert run(service.get_all_tickets()) == []


def test_cancel_prefers_booking_reference(api, backend):
    backend.on("DELETE", "/tickets/cancel/BK-9", data=None)
    run(TicketService(api).cancel_ticket(Ticket(id=9, booking_reference="BK-9", status="CONFIRMED")))
    assert backend.sent()[:2] == ("DELETE", "/tickets/cancel/BK-9")


def test_cancel_falls_back_to_id(api, backend):
    backend.on("DELETE", "/tickets/cancel/9", data=None)
    run(TicketService(api).cancel_ticket(Ticket(id=9)))
    assert len(backend.requests) == 1


def test_cancelled_ticket_is_not_cancelled_again(api, backend):
    run(TicketService(api).cancel_ticket(Ticket(booking_reference="BK-9", status="CANCELLED")))
    assert backend.requests == []


def test_cancel_without_key(api):
    with pytest.raises(ValueError):
        run(TicketService(api).cancel_ticket(Ticket()))


# --- auth ---

def test_login_starts_session_and_authorizes_requests(api, backend, session):
    backend.on("POST", "/login", data={
        "token": "jwt-123", "login_id": "jdoe", "first_name": "Jane", "role": "ROLE_ADMIN",
    })
    backend.on("GET", "/tickets/user", data=[])
    auth = AuthService(api)

    user = run(auth.login("jdoe", "secret"))
    assert backend.sent() == ("POST", "/login", {"login_id": "jdoe", "password": "secret"})
    assert user.role == "ADMIN"
    assert auth.is_authenticated()
    assert auth.current_user() == user

    run(TicketService(api).get_user_tickets())
    assert backend.requests[-1].headers["Authorization"] == "Bearer jwt-123"

    auth.logout()
    assert not auth.is_authenticated()
    assert session.user is None


def test_login_without_token_fails(api, backend, session):
    backend.on("POST", "/login", data={"login_id": "jdoe"})
    with pytest.raises(AuthenticationError):
        run(AuthService(api).login("jdoe", "secret"))
    assert not session.is_authenticated


def test_login_rejected(api, backend):
    backend.on("POST", "/login", success=False, message="Bad credentials")
    with pytest.raises(AuthenticationError, match="Bad credentials"):
        run(AuthService(api).login("jdoe", "wrong"))


def test_requests_without_session_have_no_auth_header(api, backend):
    backend.on("GET", "/all", data=[])
    run(MovieService(api).get_all_movies())
    assert "Authorization" not in backend.requests[0].headers


def test_register_sends_snake_case(api, backend):
    backend.on("POST", "/register", message="Registered")
    request = RegisterRequest(
        first_name="Jane", last_name="Doe", email="jane@example.com", login_id="jdoe",
        password="pw", confirm_password="pw",
    )
    envelope = run(AuthService(api).register(request))
    assert envelope.message == "Registered"
    assert backend.sent()[2] == {
        "first_name": "Jane", "last_name": "Doe", "email": "jane@example.com",
        "login_id": "jdoe", "password": "pw", "confirm_password": "pw",
    }


def test_password_reset_endpoints(api, backend):
    backend.on("GET", "/jdoe/forgot", message="Sent")
    backend.on("POST", "/forgot-password", message="Mail sent")
    backend.on("POST", "/reset-password", success=False, message="Token expired")
    auth = AuthService(api)

    assert run(auth.forgot_password("jdoe")).message == "Sent"
    assert run(auth.request_password_reset("jane@example.com")).success
    assert backend.sent()[2] == {"username_or_email": "jane@example.com"}
    envelope = run(auth.reset_password("tok", "n", "n"))
    assert not envelope.success
    assert backend.sent()[2] == {"token": "tok", "new_password": "n", "confirm_password": "n"}


# --- registry ---

def test_registry_returns_services(api):
    assert isinstance(ServiceRegistry.get_service("movies", api), MovieService)
    assert isinstance(ServiceRegistry.get_service("tickets", api), TicketService)
    assert isinstance(ServiceRegistry.get_service("auth", api), AuthService)
    with pytest.raises(ValueError):
        ServiceRegistry.get_service("reviews", api)

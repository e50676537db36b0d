import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

import httpx

from models import BookingSelection, MovieDraft, Resource
from ticketing.api_client import ApiClient
from ticketing.errors import ApiError, AuthenticationError
from ticketing.service_registry import ServiceRegistry
from ticketing.session import Session

logger = logging.getLogger(__name__)

Action = Callable[[Any, Dict[str, Any]], Awaitable[Any]]


def _dump(value: Any) -> Any:
    if isinstance(value, list):
        return [_dump(v) for v in value]
    if hasattr(value, "model_dump"):
        return value.model_dump(by_alias=True)
    return value


# action name -> (resource, coroutine taking the service and the event)
ACTIONS: Dict[str, Tuple[Resource, Action]] = {
    "list_movies": ("movies", lambda s, e: s.get_all_movies()),
    "search_movies": ("movies", lambda s, e: s.search_movies(e["movie_name"])),
    "add_movie": ("movies", lambda s, e: s.add_movie(MovieDraft.model_validate(e["movie"]))),
    "update_movie": ("movies", lambda s, e: s.update_movie(
        e["movie_name"], e["theatre_name"], MovieDraft.model_validate(e["movie"]))),
    "delete_movie": ("movies", lambda s, e: s.delete_movie(e["movie_name"], e["theatre_name"])),
    "book_ticket": ("tickets", lambda s, e: s.book_ticket(BookingSelection.model_validate(e["booking"]))),
    "my_tickets": ("tickets", lambda s, e: s.get_user_tickets(e.get("username"))),
    "all_tickets": ("tickets", lambda s, e: s.get_all_tickets()),
    "cancel_ticket": ("tickets", lambda s, e: s.cancel_ticket(e["booking_reference"])),
    "login": ("auth", lambda s, e: s.login(e["login_id"], e["password"])),
}


def lambda_handler(event, context, transport: Optional[httpx.AsyncBaseTransport] = None):
    action = event.get("action")
    if action not in ACTIONS:
        return {"statusCode": 400, "body": f"Unknown action: {action}"}

    resource, run = ACTIONS[action]
    session = Session(token=event.get("token"))
    api = ApiClient(session=session, base_url=event.get("base_url"), transport=transport)

    async def run_action():
        service = ServiceRegistry.get_service(resource, api)
        return await run(service, event)

    try:
        result = asyncio.run(run_action())
    except AuthenticationError as e:
        return {"statusCode": 401, "body": str(e)}
    except (ValueError, KeyError) as e:
        logger.info("Rejected %s: %s", action, e)
        return {"statusCode": 400, "body": str(e)}
    except (ApiError, httpx.HTTPError) as e:
        logger.error("Error with %s: %s", action, e)
        return {"statusCode": 502, "body": str(e)}

    body = _dump(result)
    if action == "login":
        body = {"user": body, "token": session.token}
    return {"statusCode": 200, "body": body}

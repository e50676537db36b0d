import logging
from typing import Any, List, Mapping, Optional, Union
from urllib.parse import quote

from models import BookingSelection, Resource, Ticket
from ticketing.base import BaseService
from ticketing.booking import build_booking
from ticketing.mapper import map_ticket

logger = logging.getLogger(__name__)


class TicketService(BaseService):
    resource: Resource = "tickets"

    def map_record(self, raw: Any) -> Ticket:
        return map_ticket(raw)

    async def book_ticket(self, selection: Union[BookingSelection, Mapping[str, Any]]) -> Ticket:
        request = build_booking(selection)
        data = await self.api.post(request.path, json=request.to_wire())
        ticket = map_ticket(data)
        logger.info(
            "Booked %d seat(s) for %s: %s",
            request.number_of_tickets, request.movie_name, ticket.booking_reference,
        )
        return ticket

    async def get_user_tickets(self, username: Optional[str] = None) -> List[Ticket]:
        """Tickets of ``username``, or of the logged-in user when omitted."""
        if not username:
            return self.map_list(await self.api.get("/tickets/user"))
        return self.map_list(await self.api.get(f"/tickets/{quote(username, safe='')}"))

    async def get_all_tickets(self) -> List[Ticket]:
        return self.map_list(await self.api.get("/tickets/all"))

    async def cancel_ticket(self, ticket: Union[Ticket, str]) -> None:
        if isinstance(ticket, Ticket):
            if ticket.is_cancelled:
                logger.info("Ticket %s is already cancelled", ticket.cancellation_key)
                return
            key = ticket.cancellation_key
        else:
            key = ticket
        if not key:
            raise ValueError("Ticket has neither a booking reference nor an id")

        await self.api.delete(f"/tickets/cancel/{quote(str(key), safe='')}")
        logger.info("Cancelled ticket %s", key)

import logging
from typing import Any, List, Optional
from urllib.parse import quote

from models import Movie, Resource, ShowTimesFormat
from ticketing.api_client import ApiClient
from ticketing.base import BaseService
from ticketing.mapper import map_movie
from ticketing.showtimes import build_movie_payload

logger = logging.getLogger(__name__)


def _q(value: str) -> str:
    return quote(value, safe="")


class MovieService(BaseService):
    resource: Resource = "movies"

    def __init__(self, api: Optional[ApiClient] = None, show_times_format: Optional[ShowTimesFormat] = None):
        super().__init__(api=api)
        self.show_times_format = show_times_format

    def map_record(self, raw: Any) -> Movie:
        return map_movie(raw)

    async def get_all_movies(self) -> List[Movie]:
        return self.map_list(await self.api.get("/all"))

    async def search_movies(self, movie_name: str) -> List[Movie]:
        return self.map_list(await self.api.get(f"/movies/search/{_q(movie_name)}"))

    async def add_movie(self, movie: Movie) -> Movie:
        payload = build_movie_payload(movie, fmt=self.show_times_format)
        data = await self.api.post("/admin/add", json=payload)
        logger.info("Added %s at %s", payload.get("movie_name"), payload.get("theatre_name"))
        return map_movie(data)

    async def update_movie(self, movie_name: str, theatre_name: str, changes: Movie) -> Movie:
        """
        Re-create a movie from an edit. The backend has no update endpoint, so
        the old record is deleted and the full payload posted again. The payload
        is built first; a bad edit never deletes anything.
        """
        payload = build_movie_payload(
            changes,
            movie_name=movie_name,
            theatre_name=theatre_name,
            update=True,
            fmt=self.show_times_format,
        )
        await self.delete_movie(movie_name, theatre_name)
        data = await self.api.post("/admin/add", json=payload)
        return map_movie(data)

    async def update_ticket_status(self, movie_name: str, theatre_name: str, status: str) -> Movie:
        data = await self.api.put(
            f"/{_q(movie_name)}/update/{_q(status)}",
            params={"theatreName": theatre_name},
        )
        return map_movie(data)

    async def delete_movie(self, movie_name: str, theatre_name: str) -> None:
        await self.api.delete(f"/{_q(movie_name)}/delete/{_q(theatre_name)}")
        logger.info("Deleted %s at %s", movie_name, theatre_name)

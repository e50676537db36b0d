import json as jsonlib
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from models import ApiEnvelope
from ticketing.config import settings
from ticketing.errors import ApiError
from ticketing.session import Session

logger = logging.getLogger(__name__)


class ApiClient:
    def __init__(
            self,
            session: Optional[Session] = None,
            base_url: Optional[str] = None,
            timeout: Optional[float] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Thin JSON client for the booking backend; one HTTP connection per call."""
        self.session = session or Session()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.transport = transport

    async def request(
            self,
            method: str,
            path: str,
            json: Any = None,
            params: Optional[dict] = None,
    ) -> ApiEnvelope:
        """
        Send one request and decode the ``{success, message, data}`` envelope.
        HTTP and network errors propagate as ``httpx`` exceptions.
        """
        headers = {"Accept": "application/json", **self.session.auth_headers()}
        async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            resp = await client.request(method, path, json=json, params=params, headers=headers)
            logger.info("%s %s -> %d", method, path, resp.status_code)
            resp.raise_for_status()
            try:
                body = resp.json() if resp.content else None
            except jsonlib.JSONDecodeError:
                logger.error("%s %s returned a non-JSON body", method, path)
                raise ApiError("Backend returned a non-JSON response", path=path) from None

        # bare payloads (no envelope) come from a few older endpoints
        if not isinstance(body, dict) or "success" not in body:
            return ApiEnvelope(success=True, data=body)
        try:
            return ApiEnvelope.model_validate(body)
        except ValidationError as exc:
            raise ApiError(f"Malformed response envelope: {exc.error_count()} error(s)", path=path) from exc

    async def call(self, method: str, path: str, **kwargs) -> Any:
        """Like ``request`` but returns ``data`` and raises ``ApiError`` on ``success: false``."""
        envelope = await self.request(method, path, **kwargs)
        if not envelope.success:
            logger.warning("%s %s failed: %s", method, path, envelope.message)
            raise ApiError(envelope.message, path=path)
        return envelope.data

    async def get(self, path: str, **kwargs) -> Any:
        return await self.call("GET", path, **kwargs)

    async def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return await self.call("POST", path, json=json, **kwargs)

    async def put(self, path: str, json: Any = None, **kwargs) -> Any:
        return await self.call("PUT", path, json=json, **kwargs)

    async def delete(self, path: str, **kwargs) -> Any:
        return await self.call("DELETE", path, **kwargs)

"""
Offline backend for the service tests.
Routes are registered per test; every request is recorded, nothing leaves
the process.
"""

import json

import httpx
import pytest

from ticketing.api_client import ApiClient
from ticketing.session import Session

BASE_URL = "http://backend.test"


class DummyBackend:
    """Enough of the booking API to drive the services through httpx."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, data=None, success=True, message="OK", status=200, body=None):
        if body is None:
            body = {"success": success, "message": message, "data": data}
        self.routes[(method, path)] = (status, body)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"success": False, "message": "Not found"})
        status, body = route
        if isinstance(body, str):
            return httpx.Response(status, text=body, headers={"Content-Type": "text/html"})
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def sent(self, index=-1):
        request = self.requests[index]
        payload = json.loads(request.content) if request.content else None
        return request.method, request.url.path, payload


@pytest.fixture
def backend():
    return DummyBackend()


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def api(backend, session):
    return ApiClient(session=session, base_url=BASE_URL, transport=backend.transport)

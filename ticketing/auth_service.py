import logging
from typing import Any, Optional
from urllib.parse import quote

from models import ApiEnvelope, RegisterRequest, Resource, User
from ticketing.base import BaseService
from ticketing.errors import AuthenticationError
from ticketing.mapper import map_user

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    resource: Resource = "auth"

    def map_record(self, raw: Any) -> User:
        return map_user(raw)

    async def login(self, login_id: str, password: str) -> User:
        """Authenticate and start the session; raises ``AuthenticationError``."""
        envelope = await self.api.request("POST", "/login", json={"login_id": login_id, "password": password})
        data = envelope.data if isinstance(envelope.data, dict) else {}
        token = data.get("token")
        if not envelope.success or not token:
            logger.warning("Login failed for %s: %s", login_id, envelope.message)
            raise AuthenticationError(envelope.message or "Authentication failed", path="/login")

        user = map_user(data, login_id=login_id)
        self.session.start(user, token)
        return user

    async def register(self, request: RegisterRequest) -> ApiEnvelope:
        return await self.api.request("POST", "/register", json=request.model_dump(exclude_none=True))

    async def forgot_password(self, username: str) -> ApiEnvelope:
        # legacy endpoint, kept for older deployments
        return await self.api.request("GET", f"/{quote(username, safe='')}/forgot")

    async def request_password_reset(self, username_or_email: str) -> ApiEnvelope:
        return await self.api.request(
            "POST", "/forgot-password", json={"username_or_email": username_or_email}
        )

    async def reset_password(self, token: str, new_password: str, confirm_password: str) -> ApiEnvelope:
        return await self.api.request(
            "POST",
            "/reset-password",
            json={"token": token, "new_password": new_password, "confirm_password": confirm_password},
        )

    def logout(self) -> None:
        self.session.clear()

    def current_user(self) -> Optional[User]:
        return self.session.user

    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

import logging
from typing import Optional

from models import User

logger = logging.getLogger(__name__)


class Session:
    """Current user and auth token, shared by the services of one client."""

    def __init__(self, user: Optional[User] = None, token: Optional[str] = None):
        self.user = user
        self.token = token

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def start(self, user: User, token: str) -> None:
        self.user = user
        self.token = token
        logger.info("Logged in as %s", user.login_id)

    def clear(self) -> None:
        if self.user is not None:
            logger.info("Logged out %s", self.user.login_id)
        self.user = None
        self.token = None

    def auth_headers(self) -> dict:
        if not self.token:
            # a user without a token is stale
            if self.user is not None:
                self.clear()
            return {}
        return {"Authorization": f"Bearer {self.token}"}

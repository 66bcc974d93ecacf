"""Operator login and logout."""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from blog_admin_client.errors import ApiError
from blog_admin_client.models import LoginResponse, User
from blog_admin_client.notifications import NotificationQueue
from blog_admin_client.pipeline import ApiClient
from blog_admin_client.session import Credential, SessionStore

log = structlog.get_logger()

LOGIN_ENDPOINT = "/admin/auth/login"


class AuthService:
    """Owns the session lifecycle: login sets the credential, logout tears it down."""

    def __init__(
        self, api: ApiClient, session: SessionStore, notifications: NotificationQueue
    ) -> None:
        self._api = api
        self._session = session
        self._notifications = notifications
        self.user: User | None = None

    async def login(self, email: str, password: str) -> User:
        """Authenticate and store the returned credential."""
        # Bad credentials come back as 401; that is not an expired session.
        payload = await self._api.post(
            LOGIN_ENDPOINT, json={"email": email, "password": password}, expire_session=False
        )
        if isinstance(payload, dict) and "token" not in payload and "data" in payload:
            payload = payload["data"]
        try:
            response = LoginResponse.model_validate(payload)
        except ValidationError as exc:
            raise ApiError("Malformed login response") from exc

        self._session.set(Credential(response.token, response.refresh_token))
        self.user = response.user
        await log.ainfo("operator_logged_in", user_id=response.user.id, role=response.user.role)
        return response.user

    async def logout(self) -> None:
        self._session.clear()
        self._notifications.clear()
        self.user = None
        await log.ainfo("operator_logged_out")

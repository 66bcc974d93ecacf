"""Process-scoped wiring of session, navigation, notifications and services."""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType

import httpx
import structlog

from blog_admin_client.auth import AuthService
from blog_admin_client.config import Settings
from blog_admin_client.controllers import AuthorsController, BlogsController
from blog_admin_client.navigation import NavigationBridge
from blog_admin_client.notifications import NotificationQueue
from blog_admin_client.pipeline import ApiClient
from blog_admin_client.screens import AuthorsScreen, BlogFormScreen, BlogListScreen
from blog_admin_client.services import AuthorsService, BlogsService, UploadService
from blog_admin_client.session import SessionStore
from blog_admin_client.telemetry import configure_logging, init_telemetry, shutdown_telemetry

log = structlog.get_logger()


class AdminConsole:
    """Owns the shared collaborators and hands them to each screen explicitly.

    Screens get a fresh controller each time they are created, matching the
    one-list-state-per-screen ownership rule. Use as an async context manager
    so the HTTP client and notification timers are released on exit.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        navigate_fallback: Callable[[str], object] | None = None,
    ) -> None:
        self.settings = settings
        self.session = SessionStore()
        self.navigation = NavigationBridge(
            settings.login_url, settings.login_path, fallback=navigate_fallback
        )
        self.notifications = NotificationQueue(
            success_ttl=settings.success_notification_seconds,
            error_ttl=settings.error_notification_seconds,
        )
        self.api = ApiClient(settings, self.session, self.navigation, transport=transport)
        self.auth = AuthService(self.api, self.session, self.notifications)
        self.authors = AuthorsService(self.api)
        self.blogs = BlogsService(self.api)
        self.uploads = UploadService(self.api)
        self._owns_telemetry = False

    @classmethod
    def from_env(cls) -> AdminConsole:
        """Build from ``BLOG_ADMIN_*`` env vars and set up logging/telemetry."""
        settings = Settings()  # type: ignore[call-arg]
        configure_logging(settings.log_level)
        init_telemetry()
        console = cls(settings)
        console._owns_telemetry = True
        return console

    def authors_screen(self) -> AuthorsScreen:
        controller = AuthorsController(self.authors, limit=self.settings.page_limit)
        return AuthorsScreen(controller, self.notifications, self.uploads)

    def blog_list_screen(self) -> BlogListScreen:
        controller = BlogsController(self.blogs, limit=self.settings.page_limit)
        return BlogListScreen(controller, self.notifications)

    def blog_form_screen(self, blog_id: str | None = None) -> BlogFormScreen:
        return BlogFormScreen(
            self.blogs, self.authors, self.notifications, self.uploads, blog_id=blog_id
        )

    async def aclose(self) -> None:
        self.notifications.clear()
        self.navigation.unregister()
        await self.api.close()
        await log.ainfo("console_closed")
        if self._owns_telemetry:
            shutdown_telemetry()

    async def __aenter__(self) -> AdminConsole:
        await log.ainfo("console_started", api_url=self.settings.api_url)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

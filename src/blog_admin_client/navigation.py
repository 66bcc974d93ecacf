"""Indirection that lets non-UI code send the operator to the login screen."""

from __future__ import annotations

import webbrowser
from collections.abc import Callable

import structlog

log = structlog.get_logger()

NavigateHandler = Callable[[str], None]


class NavigationBridge:
    """Delegates login redirects to a registered router handler.

    Until a handler is registered, redirects fall back to a hard navigation
    of the full login URL so they are never dropped.
    """

    def __init__(
        self,
        login_url: str,
        login_path: str = "/login",
        fallback: Callable[[str], object] | None = None,
    ) -> None:
        self._login_url = login_url
        self._login_path = login_path
        self._fallback = fallback or webbrowser.open
        self._handler: NavigateHandler | None = None

    @property
    def registered(self) -> bool:
        return self._handler is not None

    def register(self, handler: NavigateHandler) -> None:
        """Install the router handler. Replaces any previous one."""
        self._handler = handler

    def unregister(self) -> None:
        self._handler = None

    def trigger_login_redirect(self) -> None:
        """Navigate to the login screen. One handler call per invocation."""
        if self._handler is not None:
            log.info("login_redirect", path=self._login_path)
            self._handler(self._login_path)
            return
        log.warning("login_redirect_fallback", url=self._login_url)
        self._fallback(self._login_url)

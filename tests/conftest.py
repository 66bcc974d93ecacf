"""Shared test constants, fixtures, and factory functions."""

from collections.abc import AsyncIterator, Callable
from typing import Any
from unittest.mock import MagicMock

import httpx

from blog_admin_client.config import Settings
from blog_admin_client.navigation import NavigationBridge
from blog_admin_client.pipeline import ApiClient
from blog_admin_client.session import Credential, SessionStore

# -- Constants --

API_URL = "https://api.example.com/api"
LOGIN_URL = "https://api.example.com/api/login"
TOKEN = "test-token"
REFRESH_TOKEN = "test-refresh-token"

AUTHOR_PAYLOAD: dict[str, Any] = {
    "_id": "a1",
    "name": "Jane Doe",
    "image": "https://cdn.example.com/jane.png",
    "createdAt": "2024-01-01T00:00:00Z",
    "updatedAt": "2024-01-02T00:00:00Z",
}

BLOG_PAYLOAD: dict[str, Any] = {
    "_id": "b1",
    "title": "Hello World",
    "slug": "hello-world",
    "content": "<p>Hi</p>",
    "mainImage": "https://cdn.example.com/main.png",
    "coverImage": "https://cdn.example.com/cover.png",
    "author": AUTHOR_PAYLOAD,
    "createdAt": "2024-01-01T00:00:00Z",
    "updatedAt": "2024-01-02T00:00:00Z",
}

USER_PAYLOAD: dict[str, Any] = {
    "_id": "u1",
    "name": "Admin User",
    "firstName": "Admin",
    "lastName": "User",
    "email": "admin@example.com",
    "role": "admin",
    "isActive": True,
}

Handler = Callable[[httpx.Request], Any]


# -- Factories --


def make_settings(**overrides: Any) -> Settings:
    """Create a Settings instance with test defaults. Override any field."""
    defaults: dict[str, Any] = {
        "api_url": API_URL,
        "retry_base_delay": 0.0,
        "retry_max_delay": 0.0,
        "success_notification_seconds": 1.0,
        "error_notification_seconds": 2.0,
    }
    return Settings(**(defaults | overrides))


def make_author(author_id: str = "a1", name: str = "Jane Doe", **extra: Any) -> dict[str, Any]:
    return {**AUTHOR_PAYLOAD, "_id": author_id, "name": name, **extra}


def make_blog(blog_id: str = "b1", **extra: Any) -> dict[str, Any]:
    return {**BLOG_PAYLOAD, "_id": blog_id, **extra}


def list_response(
    key: str, items: list[dict[str, Any]], total: int, page: int = 1, limit: int = 10
) -> httpx.Response:
    """List endpoint response in the backend's envelope shape."""
    pages = -(-total // limit)
    return httpx.Response(
        200,
        json={
            key: items,
            "pagination": {"total": total, "page": page, "limit": limit, "pages": pages},
        },
    )


class _GarbageBody(httpx.AsyncByteStream):
    async def __aiter__(self) -> AsyncIterator[bytes]:
        yield b"not gzip"


def garbage_gzip_response(request: httpx.Request) -> httpx.Response:
    """Handler whose body claims gzip encoding but cannot be decoded."""
    return httpx.Response(200, headers={"Content-Encoding": "gzip"}, stream=_GarbageBody())


class RecordingBackend:
    """Mock transport handler that records requests and replays queued responses.

    Routes are keyed by ``(method, path)`` relative to the API prefix. Each
    call pops the next queued response; the last one repeats once the queue
    runs dry. Queued callables are invoked with the request (sync or async).
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[httpx.Response | Handler]] = {}

    def add(self, method: str, path: str, *responses: httpx.Response | Handler) -> None:
        self._routes.setdefault((method, path), []).extend(responses)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == f"/api{path}"]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        queue = self._routes.get((request.method, path))
        if not queue:
            return httpx.Response(404, json={"message": f"No route {request.method} {path}"})
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, httpx.Response):
            # Fresh copy: a Response object is bound to a single request.
            return httpx.Response(
                response.status_code, headers=response.headers, content=response.content
            )
        result = response(request)
        if not isinstance(result, httpx.Response):
            result = await result
        return result

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def make_api(
    backend: RecordingBackend,
    *,
    authenticated: bool = True,
    **settings_overrides: Any,
) -> tuple[ApiClient, SessionStore, NavigationBridge, MagicMock]:
    """ApiClient wired to *backend* with a mock hard-navigation fallback."""
    settings = make_settings(**settings_overrides)
    session = SessionStore(Credential(TOKEN, REFRESH_TOKEN) if authenticated else None)
    fallback = MagicMock()
    navigation = NavigationBridge(settings.login_url, settings.login_path, fallback=fallback)
    api = ApiClient(settings, session, navigation, transport=backend.transport)
    return api, session, navigation, fallback

"""Request pipeline: credential attachment, failure classification, retry, session expiry."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import httpx
import structlog

from blog_admin_client import metrics
from blog_admin_client.config import Settings
from blog_admin_client.errors import Failure, RequestOutcome, Success, classify_status
from blog_admin_client.navigation import NavigationBridge
from blog_admin_client.session import Credential, SessionStore
from blog_admin_client.telemetry import get_tracer

log = structlog.get_logger()
_tracer = get_tracer(__name__)

# Only idempotent reads are retried; writes could duplicate side effects.
_READ_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})

_SESSION_EXPIRED = "Session expired. Please log in again."


def _server_message(resp: httpx.Response) -> str | None:
    """Pull the human-readable message out of an error body, if any."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in ("message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


class ApiClient:
    """Wraps every backend call made by the console.

    Each call gets the current credential, is classified into success or a
    failure kind, and transient read failures are retried with capped
    exponential backoff. A 401 tears down the session and redirects to login.
    """

    def __init__(
        self,
        settings: Settings,
        session: SessionStore,
        navigation: NavigationBridge,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._session = session
        self._navigation = navigation
        self._read_retries = settings.read_retries
        self._base_delay = settings.retry_base_delay
        self._max_delay = settings.retry_max_delay
        self._sleep = sleep
        self._client = httpx.AsyncClient(
            base_url=settings.api_url.rstrip("/"),
            headers={"Accept": "application/json"},
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def backoff_delay(self, attempt: int) -> float:
        """Delay before retry number *attempt* (0-based)."""
        return min(self._base_delay * 2**attempt, self._max_delay)

    async def send(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
        expire_session: bool = True,
    ) -> RequestOutcome:
        """Perform one logical call and return its outcome. Never raises for HTTP failures.

        A 401 tears down the session and redirects to login unless
        *expire_session* is False (the login call itself).
        """
        method = method.upper()
        max_retries = self._read_retries if method in _READ_METHODS else 0
        if params is not None:
            params = {k: v for k, v in params.items() if v is not None}

        start = time.monotonic()
        with _tracer.start_as_current_span("api.request") as span:
            span.set_attribute("http.method", method)
            span.set_attribute("api.path", path)
            attempt = 0
            while True:
                outcome = await self._attempt(
                    method, path, json=json, params=params, files=files, expire_session=expire_session
                )
                if (
                    isinstance(outcome, Failure)
                    and outcome.kind == "transient"
                    and attempt < max_retries
                ):
                    delay = self.backoff_delay(attempt)
                    attempt += 1
                    metrics.api_request_retries_total.add(1, {"method": method})
                    await log.awarning(
                        "api_request_retry",
                        method=method,
                        path=path,
                        attempt=attempt,
                        delay=delay,
                        status=outcome.status,
                        error=outcome.message,
                    )
                    await self._sleep(delay)
                    continue
                break

            result = "success" if isinstance(outcome, Success) else outcome.kind
            span.set_attribute("api.outcome", result)
            if outcome.status is not None:
                span.set_attribute("http.status_code", outcome.status)

        metrics.api_requests_total.add(1, {"method": method, "outcome": result})
        metrics.api_request_duration.record(time.monotonic() - start, {"method": method})
        if isinstance(outcome, Failure):
            await log.ainfo(
                "api_request_failed",
                method=method,
                path=path,
                kind=outcome.kind,
                status=outcome.status,
                error=outcome.message,
            )
        return outcome

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Like :meth:`send` but returns the payload or raises :class:`ApiError`."""
        return (await self.send(method, path, **kwargs)).unwrap()

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", path, json=json, **kwargs)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def _attempt(
        self,
        method: str,
        path: str,
        *,
        json: Any,
        params: Mapping[str, Any] | None,
        files: Mapping[str, Any] | None,
        expire_session: bool,
    ) -> RequestOutcome:
        credential = self._session.credential
        try:
            resp = await self._client.request(
                method,
                path,
                json=json,
                params=params,
                files=files,
                headers=self._session.authorization_header(),
            )
        except httpx.RequestError as exc:
            return Failure("transient", str(exc) or "Network error")
        return self._classify(resp, credential, expire_session=expire_session)

    def _classify(
        self, resp: httpx.Response, credential: Credential | None, *, expire_session: bool = True
    ) -> RequestOutcome:
        status = resp.status_code
        kind = classify_status(status)
        if kind is None:
            try:
                payload = resp.json() if resp.content else None
            except ValueError:
                payload = resp.text
            return Success(payload, status)

        if kind == "unauthenticated":
            if expire_session:
                self._expire_session(credential)
            return Failure(kind, _server_message(resp) or _SESSION_EXPIRED, status)

        message = _server_message(resp) or f"Request failed with status code {status}"
        return Failure(kind, message, status)

    def _expire_session(self, credential: Credential | None) -> None:
        # Concurrent 401s: only the first one redirects until the session is re-armed.
        if not self._session.expire(credential):
            return
        metrics.session_expired_total.add(1)
        log.warning("session_expired")
        self._navigation.trigger_login_redirect()

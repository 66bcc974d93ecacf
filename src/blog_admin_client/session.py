"""Process-scoped credential holder shared by the request pipeline."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

log = structlog.get_logger()


@dataclass(frozen=True)
class Credential:
    """Bearer token identifying the signed-in operator."""

    token: str
    refresh_token: str | None = None

    def __repr__(self) -> str:
        return "Credential(token=***)"


class SessionStore:
    """Holds at most one active credential.

    Set on login, cleared on logout or when the backend rejects the
    credential. All mutation happens on the event loop thread, so no locking.
    """

    def __init__(self, credential: Credential | None = None) -> None:
        self._credential = credential
        self._redirect_pending = False

    @property
    def credential(self) -> Credential | None:
        return self._credential

    @property
    def token(self) -> str | None:
        return self._credential.token if self._credential else None

    @property
    def is_authenticated(self) -> bool:
        return self._credential is not None

    def authorization_header(self) -> dict[str, str]:
        """Header to attach to outbound requests; empty when signed out."""
        if self._credential is None:
            return {}
        return {"Authorization": f"Bearer {self._credential.token}"}

    def set(self, credential: Credential) -> None:
        self._credential = credential
        self._redirect_pending = False
        log.info("session_started")

    def clear(self) -> bool:
        """Drop the credential. Returns True if one was present."""
        self._redirect_pending = False
        if self._credential is None:
            return False
        self._credential = None
        log.info("session_cleared")
        return True

    def expire(self, rejected: Credential | None) -> bool:
        """Tear down the session after the backend rejected *rejected*.

        Returns True when the caller should redirect to login: once per
        expiry until the next `set` or `clear`, so N concurrent 401s yield a
        single redirect. A 401 for a credential that has since been replaced
        (stale call from an earlier session) is ignored.
        """
        if self._redirect_pending:
            return False
        if rejected is not None and self._credential not in (None, rejected):
            return False
        self._redirect_pending = True
        if self._credential is not None:
            self._credential = None
            log.info("session_cleared")
        return True

"""Failure taxonomy for backend calls and the tagged request outcome."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

ErrorKind = Literal["client", "unauthenticated", "transient", "upload"]


class ApiError(Exception):
    """Base error for every failed backend interaction."""

    kind: ErrorKind = "client"

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    @property
    def retryable(self) -> bool:
        return self.kind == "transient"


class ClientError(ApiError):
    """Request rejected with a 4xx status. Never retried."""

    kind: ErrorKind = "client"


class UnauthenticatedError(ApiError):
    """Credential rejected (401). The session has already been torn down."""

    kind: ErrorKind = "unauthenticated"


class TransientError(ApiError):
    """5xx response or network-level failure."""

    kind: ErrorKind = "transient"


class UploadError(ApiError):
    """Upload response did not carry an image URL."""

    kind: ErrorKind = "upload"


_ERRORS_BY_KIND: dict[str, type[ApiError]] = {
    "client": ClientError,
    "unauthenticated": UnauthenticatedError,
    "transient": TransientError,
    "upload": UploadError,
}


@dataclass(frozen=True)
class Success:
    payload: Any
    status: int = 200
    ok: Literal[True] = True

    def unwrap(self) -> Any:
        return self.payload


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str
    status: int | None = None
    ok: Literal[False] = False

    def unwrap(self) -> Any:
        raise self.to_error()

    def to_error(self) -> ApiError:
        return _ERRORS_BY_KIND[self.kind](self.message, self.status)


RequestOutcome = Success | Failure


def classify_status(status: int) -> ErrorKind | None:
    """Map an HTTP status to an error kind, or None for success."""
    if status == 401:
        return "unauthenticated"
    if 400 <= status < 500:
        return "client"
    if status >= 500:
        return "transient"
    return None


def error_message(err: BaseException, fallback: str) -> str:
    """Human-readable message for *err*, or *fallback* when it carries none."""
    message = err.message if isinstance(err, ApiError) else str(err)
    return message or fallback

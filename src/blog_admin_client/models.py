"""Pydantic models for the blog admin API payloads and client-side state."""

from __future__ import annotations

import math
import time
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

_API_CONFIG = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)


class User(BaseModel):
    """Authenticated operator."""

    model_config = _API_CONFIG

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str
    phone: str | None = None
    role: Literal["admin", "superadmin"]
    is_active: bool = True
    permissions: list[str] = Field(default_factory=list)
    last_login: str | None = None


class LoginResponse(BaseModel):
    """Payload returned by the login endpoint."""

    model_config = _API_CONFIG

    user: User
    token: str
    refresh_token: str | None = None


class Author(BaseModel):
    """Author as returned by the admin API."""

    model_config = _API_CONFIG

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str
    image: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class ExpandedAuthor(BaseModel):
    """Blog author delivered as a full object."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["expanded"] = "expanded"
    author: Author

    @property
    def id(self) -> str:
        return self.author.id


class AuthorId(BaseModel):
    """Blog author delivered as a bare identifier."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["id"] = "id"
    id: str


AuthorRef = Annotated[ExpandedAuthor | AuthorId, Field(discriminator="kind")]


class Blog(BaseModel):
    """Blog post as returned by the admin API."""

    model_config = _API_CONFIG

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str
    slug: str
    content: str = ""
    main_image: str = ""
    cover_image: str = ""
    author: AuthorRef
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("author", mode="before")
    @classmethod
    def _resolve_author(cls, v: Any) -> Any:
        # Populated queries return the author document, others only its id.
        if isinstance(v, str):
            return {"kind": "id", "id": v}
        if isinstance(v, dict) and "kind" not in v:
            return {"kind": "expanded", "author": v}
        return v

    @property
    def author_id(self) -> str:
        return self.author.id

    @property
    def author_name(self) -> str:
        if isinstance(self.author, ExpandedAuthor):
            return self.author.author.name
        return "Unknown"


class AuthorInput(BaseModel):
    """Body for author create/update calls."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=100)
    image: str | None = None

    @field_validator("image")
    @classmethod
    def _drop_empty_image(cls, v: str | None) -> str | None:
        return v or None


class BlogInput(BaseModel):
    """Body for blog create/update calls."""

    model_config = ConfigDict(
        str_strip_whitespace=True, alias_generator=to_camel, populate_by_name=True
    )

    title: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    content: str = Field(min_length=1)
    main_image: str = ""
    cover_image: str = ""
    author: str = Field(min_length=1, description="Author id")


class Pagination(BaseModel):
    """Server-side pagination cursor. ``pages`` is always derived from total/limit."""

    model_config = ConfigDict(extra="ignore")

    total: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, gt=0)
    pages: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _derive_pages(self) -> Pagination:
        pages = math.ceil(self.total / self.limit) if self.total > 0 else 0
        self.pages = pages
        return self

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


T = TypeVar("T")


class PaginatedListState(BaseModel, Generic[T]):
    """One page of a resource list together with its cursor."""

    model_config = ConfigDict(frozen=True)

    items: tuple[T, ...] = ()
    pagination: Pagination = Field(default_factory=Pagination)

    @property
    def total(self) -> int:
        return self.pagination.total

    @property
    def page(self) -> int:
        return self.pagination.page

    @property
    def limit(self) -> int:
        return self.pagination.limit

    @property
    def page_count(self) -> int:
        return self.pagination.pages


NotificationKind = Literal["success", "error"]


class Notification(BaseModel):
    """Ephemeral user-facing message."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Monotonic identifier, unique per queue")
    kind: NotificationKind
    title: str
    description: str | None = None
    created_at: float = Field(default_factory=time.monotonic)

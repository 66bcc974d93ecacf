"""Stateful paginated CRUD controllers consumed by the list screens."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Generic

import structlog
from pydantic import BaseModel

from blog_admin_client.errors import ApiError, error_message
from blog_admin_client.models import (
    Author,
    Blog,
    PaginatedListState,
    Pagination,
)
from blog_admin_client.services import AuthorsService, BlogsService, ModelT, ResourceService

log = structlog.get_logger()


class ResourceController(Generic[ModelT]):
    """List, loading, error and pagination state for one resource on one screen.

    Calls are not serialized: overlapping calls apply their results in
    completion order, so the last one to finish wins.
    """

    def __init__(
        self,
        service: ResourceService[ModelT],
        *,
        singular: str,
        plural: str,
        limit: int = 10,
    ) -> None:
        self._service = service
        self._singular = singular
        self._plural = plural
        self._limit = limit
        self._items: tuple[ModelT, ...] = ()
        self._pagination = Pagination(limit=limit)
        self._search = ""
        self._has_fetched = False
        self.loading = False
        self.error: str | None = None

    @property
    def items(self) -> tuple[ModelT, ...]:
        return self._items

    @property
    def pagination(self) -> Pagination:
        return self._pagination

    @property
    def state(self) -> PaginatedListState[ModelT]:
        """Snapshot of the current page for rendering."""
        return PaginatedListState(items=self._items, pagination=self._pagination)

    @property
    def has_fetched(self) -> bool:
        return self._has_fetched

    async def ensure_loaded(self) -> bool:
        """Run the initial fetch exactly once per controller. Returns True if it ran."""
        if self._has_fetched:
            return False
        self._has_fetched = True
        await self.fetch()
        return True

    async def fetch(self, page: int = 1, search: str = "") -> None:
        """Load a page. On failure the previous items stay and ``error`` is set."""
        self._has_fetched = True
        self.loading = True
        self.error = None
        try:
            result = await self._service.list(page=page, limit=self._limit, search=search)
        except ApiError as exc:
            self.error = error_message(exc, f"Failed to fetch {self._plural}")
            await log.awarning(
                "resource_fetch_failed", resource=self._plural, page=page, error=self.error
            )
        else:
            self._items = tuple(result.items)
            if result.pagination is not None:
                self._pagination = result.pagination
            else:
                # Keep totals but track the page we are on so refreshes stay put.
                self._pagination = self._pagination.model_copy(update={"page": page})
            self._search = search
        finally:
            self.loading = False

    async def refresh(self) -> None:
        """Re-fetch the last known page with the last search."""
        await self.fetch(self._pagination.page, self._search)

    async def _mutate(self, action: str, call: Callable[[], Awaitable[Any]]) -> None:
        self.loading = True
        self.error = None
        try:
            await call()
            await self.refresh()
        except ApiError as exc:
            self.error = error_message(exc, f"Failed to {action} {self._singular}")
            await log.awarning(
                "resource_mutation_failed",
                resource=self._plural,
                action=action,
                kind=exc.kind,
                error=self.error,
            )
            raise
        finally:
            self.loading = False

    async def create(self, data: BaseModel) -> None:
        await self._mutate("create", lambda: self._service.create(data))

    async def update(self, item_id: str, data: BaseModel) -> None:
        await self._mutate("update", lambda: self._service.update(item_id, data))

    async def delete(self, item_id: str) -> None:
        await self._mutate("delete", lambda: self._service.delete(item_id))


class AuthorsController(ResourceController[Author]):
    def __init__(self, service: AuthorsService, limit: int = 10) -> None:
        super().__init__(service, singular="author", plural="authors", limit=limit)


class BlogsController(ResourceController[Blog]):
    def __init__(self, service: BlogsService, limit: int = 10) -> None:
        super().__init__(service, singular="blog", plural="blogs", limit=limit)

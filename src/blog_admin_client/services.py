"""Typed wrappers over the admin resource and upload endpoints."""

from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from blog_admin_client import metrics
from blog_admin_client.errors import ApiError, UploadError
from blog_admin_client.models import Author, Blog, Pagination
from blog_admin_client.pipeline import ApiClient

log = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)

AUTHOR_IMAGE_ENDPOINT = "/admin/upload/author-image"
BLOG_IMAGE_ENDPOINT = "/admin/upload/blog-image"


def _unwrap_data(payload: Any, key: str) -> Any:
    """Return the object holding *key*, looking inside a ``data`` envelope if needed."""
    if not isinstance(payload, dict):
        return {}
    if key not in payload and isinstance(payload.get("data"), dict):
        return payload["data"]
    return payload


@dataclass(frozen=True)
class ListPage(Generic[ModelT]):
    """One page from a list endpoint. ``pagination`` is None when the server omits it."""

    items: list[ModelT]
    pagination: Pagination | None


class ResourceService(Generic[ModelT]):
    """CRUD calls for one admin collection, e.g. ``/admin/authors``."""

    def __init__(
        self,
        api: ApiClient,
        *,
        path: str,
        collection_key: str,
        item_key: str,
        model: type[ModelT],
    ) -> None:
        self._api = api
        self.path = path
        self.collection_key = collection_key
        self.item_key = item_key
        self._model = model

    async def list(self, page: int = 1, limit: int = 10, search: str = "") -> ListPage[ModelT]:
        payload = await self._api.get(
            self.path, params={"page": page, "limit": limit, "search": search}
        )
        body = _unwrap_data(payload, self.collection_key)
        try:
            items = [self._model.model_validate(raw) for raw in body.get(self.collection_key) or []]
            raw_pagination = body.get("pagination")
            pagination = (
                Pagination.model_validate(raw_pagination) if raw_pagination is not None else None
            )
        except ValidationError as exc:
            raise ApiError(f"Malformed {self.collection_key} response") from exc
        return ListPage(items=items, pagination=pagination)

    async def get(self, item_id: str) -> ModelT:
        payload = await self._api.get(f"{self.path}/{item_id}")
        item = self._parse_item(payload)
        if item is None:
            raise ApiError(f"Malformed {self.item_key} response")
        return item

    async def create(self, data: BaseModel) -> ModelT | None:
        payload = await self._api.post(
            self.path, json=data.model_dump(by_alias=True, exclude_none=True)
        )
        return self._parse_item(payload)

    async def update(self, item_id: str, data: BaseModel) -> ModelT | None:
        payload = await self._api.put(
            f"{self.path}/{item_id}", json=data.model_dump(by_alias=True, exclude_none=True)
        )
        return self._parse_item(payload)

    async def delete(self, item_id: str) -> None:
        await self._api.delete(f"{self.path}/{item_id}")

    def _parse_item(self, payload: Any) -> ModelT | None:
        raw = _unwrap_data(payload, self.item_key).get(self.item_key)
        if raw is None:
            return None
        try:
            return self._model.model_validate(raw)
        except ValidationError as exc:
            raise ApiError(f"Malformed {self.item_key} response") from exc


class AuthorsService(ResourceService[Author]):
    def __init__(self, api: ApiClient) -> None:
        super().__init__(
            api, path="/admin/authors", collection_key="authors", item_key="author", model=Author
        )


class BlogsService(ResourceService[Blog]):
    def __init__(self, api: ApiClient) -> None:
        super().__init__(
            api, path="/admin/blogs", collection_key="blogs", item_key="blog", model=Blog
        )


@dataclass(frozen=True)
class ImageFile:
    """An image picked for upload."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: str | Path) -> ImageFile:
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(filename=path.name, content=path.read_bytes(), content_type=content_type)

    def data_url(self) -> str:
        """Inline ``data:`` URL for showing a local preview before upload completes."""
        encoded = base64.b64encode(self.content).decode()
        return f"data:{self.content_type};base64,{encoded}"


class UploadService:
    """Multipart image uploads returning the hosted image URL."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def upload_blog_image(self, file: ImageFile) -> str:
        return await self._upload(BLOG_IMAGE_ENDPOINT, file)

    async def upload_author_image(self, file: ImageFile) -> str:
        return await self._upload(AUTHOR_IMAGE_ENDPOINT, file)

    async def _upload(self, endpoint: str, file: ImageFile) -> str:
        try:
            payload = await self._api.post(
                endpoint, files={"image": (file.filename, file.content, file.content_type)}
            )
            # Backend returns {"success": true, "data": {"imageUrl": "..."}}
            url = _unwrap_data(payload, "imageUrl").get("imageUrl")
            if not isinstance(url, str) or not url.strip():
                raise UploadError("Failed to get image URL from response")
        except ApiError:
            metrics.uploads_total.add(1, {"outcome": "error"})
            raise
        metrics.uploads_total.add(1, {"outcome": "success"})
        await log.ainfo("image_uploaded", endpoint=endpoint, filename=file.filename)
        return url.strip()

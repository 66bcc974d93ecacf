"""Screen-level state and handlers for the authors and blog pages.

Screens turn controller outcomes into notifications and decide whether the
open form or confirmation dialog closes. Rendering itself is up to the host.
"""

from __future__ import annotations

import re

import structlog

from blog_admin_client.controllers import AuthorsController, BlogsController
from blog_admin_client.errors import ApiError, error_message
from blog_admin_client.models import Author, AuthorInput, Blog, BlogInput
from blog_admin_client.notifications import NotificationQueue
from blog_admin_client.services import AuthorsService, BlogsService, UploadService
from blog_admin_client.uploads import ImageField

log = structlog.get_logger()

_AUTHOR_OPTIONS_LIMIT = 100


def slugify(title: str) -> str:
    """URL slug derived from a blog title."""
    slug = re.sub(r"[^a-z0-9\s-]", "", title.lower())
    return re.sub(r"[\s-]+", "-", slug).strip("-")


class AuthorsScreen:
    """Author table with a create/edit modal and delete confirmation."""

    def __init__(
        self,
        controller: AuthorsController,
        notifications: NotificationQueue,
        uploads: UploadService,
    ) -> None:
        self.controller = controller
        self._notifications = notifications
        self.image = ImageField(uploads.upload_author_image, notifications)
        self.form_open = False
        self.editing: Author | None = None

    async def render(self) -> None:
        """Called on every render; only the first one loads data."""
        await self.controller.ensure_loaded()

    def open_form(self, author: Author | None = None) -> None:
        self.editing = author
        self.image.reset(author.image if author else None)
        self.form_open = True

    def close_form(self) -> None:
        self.form_open = False
        self.editing = None
        self.image.reset()

    async def save(self, name: str) -> bool:
        """Submit the form. Returns True when the modal closed."""
        data = AuthorInput(name=name, image=self.image.url)
        try:
            if self.editing is not None:
                await self.controller.update(self.editing.id, data)
                self._notifications.success("Success", "Author updated successfully")
            else:
                await self.controller.create(data)
                self._notifications.success("Success", "Author created successfully")
        except ApiError as exc:
            self._notifications.error("Error", error_message(exc, "Failed to save author"))
            return False
        self.close_form()
        return True

    async def delete(self, author_id: str) -> bool:
        """Delete after confirmation. Returns True when the dialog closed."""
        try:
            await self.controller.delete(author_id)
        except ApiError:
            self._notifications.error("Error", "Failed to delete author")
            return False
        self._notifications.success("Success", "Author deleted successfully")
        return True

    async def change_page(self, page: int) -> None:
        await self.controller.fetch(page)


class BlogListScreen:
    """Searchable blog table with delete confirmation."""

    def __init__(self, controller: BlogsController, notifications: NotificationQueue) -> None:
        self.controller = controller
        self._notifications = notifications
        self.search_query = ""

    async def render(self) -> None:
        await self.controller.ensure_loaded()

    async def change_page(self, page: int) -> None:
        await self.controller.fetch(page, self.search_query)

    async def search(self, query: str) -> None:
        """Submit the search box; results start from the first page."""
        self.search_query = query.strip()
        await self.controller.fetch(1, self.search_query)

    async def delete(self, blog_id: str) -> bool:
        try:
            await self.controller.delete(blog_id)
        except ApiError as exc:
            self._notifications.error("Error", error_message(exc, "Failed to delete blog"))
            return False
        self._notifications.success("Success", "Blog deleted successfully")
        return True


class BlogFormScreen:
    """Add/edit page for a single blog post."""

    def __init__(
        self,
        blogs: BlogsService,
        authors: AuthorsService,
        notifications: NotificationQueue,
        uploads: UploadService,
        blog_id: str | None = None,
    ) -> None:
        self._blogs = blogs
        self._authors = authors
        self._notifications = notifications
        self.blog_id = blog_id
        self.blog: Blog | None = None
        self.author_options: list[Author] = []
        self.main_image = ImageField(uploads.upload_blog_image, notifications)
        self.cover_image = ImageField(uploads.upload_blog_image, notifications)
        self.loading = False

    @property
    def is_edit(self) -> bool:
        return self.blog_id is not None

    async def load(self) -> None:
        """Fetch the author choices and, when editing, the blog itself."""
        self.loading = True
        try:
            page = await self._authors.list(page=1, limit=_AUTHOR_OPTIONS_LIMIT)
            self.author_options = page.items
            if self.blog_id is not None:
                self.blog = await self._blogs.get(self.blog_id)
                self.main_image.reset(self.blog.main_image)
                self.cover_image.reset(self.blog.cover_image)
        except ApiError as exc:
            self._notifications.error("Error", error_message(exc, "Failed to load blog"))
            await log.awarning("blog_form_load_failed", blog_id=self.blog_id, error=exc.message)
        finally:
            self.loading = False

    async def save(
        self, *, title: str, content: str, author_id: str, slug: str | None = None
    ) -> bool:
        """Create or update the post. Returns True on success."""
        data = BlogInput(
            title=title,
            slug=slug or slugify(title),
            content=content,
            main_image=self.main_image.url or "",
            cover_image=self.cover_image.url or "",
            author=author_id,
        )
        self.loading = True
        try:
            if self.blog_id is not None:
                saved = await self._blogs.update(self.blog_id, data)
                self._notifications.success("Success", "Blog updated successfully")
            else:
                saved = await self._blogs.create(data)
                self._notifications.success("Success", "Blog created successfully")
        except ApiError as exc:
            self._notifications.error("Error", error_message(exc, "Failed to save blog"))
            return False
        finally:
            self.loading = False
        if saved is not None:
            self.blog = saved
        return True

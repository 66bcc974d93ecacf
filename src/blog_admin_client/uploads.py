"""Image staging for author/blog forms: local preview, upload, rollback."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

import structlog

from blog_admin_client.errors import ApiError, error_message
from blog_admin_client.notifications import NotificationQueue
from blog_admin_client.services import ImageFile

log = structlog.get_logger()

Uploader = Callable[[ImageFile], Awaitable[str]]


class ImageField:
    """Preview and staged URL for one image input on a form.

    ``preview`` switches to a local data URL as soon as a file is picked and
    to the hosted URL once the upload succeeds. A failed upload restores
    whatever was there before and raises an error notification; the rest of
    the form stays usable.
    """

    def __init__(
        self,
        uploader: Uploader,
        notifications: NotificationQueue,
        initial_url: str | None = None,
    ) -> None:
        self._uploader = uploader
        self._notifications = notifications
        self.url = initial_url or None
        self.preview = self.url
        self.uploading = False

    def reset(self, url: str | None = None) -> None:
        """Load the image of the item being edited, or clear for a new one."""
        self.url = url or None
        self.preview = self.url
        self.uploading = False

    async def upload(self, file: ImageFile) -> str | None:
        """Upload *file*. Returns the hosted URL, or None if the upload failed."""
        previous_url, previous_preview = self.url, self.preview
        self.preview = file.data_url()
        self.uploading = True
        try:
            url = await self._uploader(file)
        except ApiError as exc:
            self.url, self.preview = previous_url, previous_preview
            message = error_message(exc, "Failed to upload image. Please try again.")
            self._notifications.error("Upload Failed", message)
            await log.awarning("image_upload_failed", filename=file.filename, error=message)
            return None
        finally:
            self.uploading = False
        self.url = url
        self.preview = url
        self._notifications.success("Upload Successful", "Image uploaded successfully")
        return url

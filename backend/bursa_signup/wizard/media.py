"""Logo and photo attachments for a wizard draft.

Every image is uploaded on its own; a URL lands in the draft only once
its upload has succeeded, so an image is either fully present or absent.
Photos in the same batch upload concurrently and are appended in the
order they finish.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable

from bursa_signup.config import settings
from bursa_signup.schemas.draft import DraftSubmission
from bursa_signup.schemas.submission import MediaFieldState
from bursa_signup.services.media_store import MediaStore, MediaUploadError

logger = logging.getLogger(__name__)

NOT_AN_IMAGE = "File harus berupa gambar"
FILE_TOO_LARGE = "Ukuran file maksimal 5MB"
UPLOAD_FAILED = "Gagal mengupload gambar"
UPLOAD_IN_PROGRESS = "Unggahan sedang berlangsung"


def too_many_photos(limit: int) -> str:
    return f"Maksimal {limit} foto"


@dataclass
class ImageUpload:
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


def check_image(upload: ImageUpload) -> str | None:
    """Local guard run before any network call."""
    if not (upload.content_type or "").startswith("image/"):
        return NOT_AN_IMAGE
    if upload.size > settings.max_upload_bytes:
        return FILE_TOO_LARGE
    return None


class MediaAttachments:
    def __init__(
        self,
        draft: DraftSubmission,
        max_photos: int | None = None,
        on_change: Callable[[], None] | None = None,
    ):
        self.draft = draft
        self.max_photos = max_photos or settings.max_photos
        # Called whenever an image URL lands in or leaves the draft.
        self.on_change = on_change
        self.logo = MediaFieldState()
        self.photos = MediaFieldState()

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    # ── Logo ────────────────────────────────────────────────

    async def attach_logo(self, upload: ImageUpload, store: MediaStore) -> bool:
        if self.logo.busy:
            self.logo.error = UPLOAD_IN_PROGRESS
            return False

        error = check_image(upload)
        if error:
            self.logo.error = error
            return False

        self.logo.busy = True
        self.logo.pending = 1
        self.logo.error = None
        try:
            url = await store.upload(upload.filename, upload.content, upload.content_type)
        except MediaUploadError as e:
            logger.warning(f"Logo upload failed: {e}")
            self.draft.logo_url = ""
            self.logo.error = UPLOAD_FAILED
            return False
        finally:
            self.logo.busy = False
            self.logo.pending = 0

        self.draft.logo_url = url
        self._changed()
        return True

    def clear_logo(self) -> None:
        self.draft.logo_url = ""
        self.logo.error = None
        self._changed()

    # ── Photos ──────────────────────────────────────────────

    async def attach_photos(self, uploads: list[ImageUpload], store: MediaStore) -> list[str]:
        """Upload a batch; returns the URLs that made it into the draft.

        The whole batch is refused up front if any file fails the local
        guard or if it would push the list (counting uploads still in
        flight) past the cap.
        """
        if not uploads:
            return []

        if len(self.draft.photos) + self.photos.pending + len(uploads) > self.max_photos:
            self.photos.error = too_many_photos(self.max_photos)
            return []

        for upload in uploads:
            error = check_image(upload)
            if error:
                self.photos.error = error
                return []

        self.photos.pending += len(uploads)
        self.photos.busy = True
        self.photos.error = None
        results = await asyncio.gather(
            *(self._upload_photo(upload, store) for upload in uploads)
        )
        return [url for url in results if url]

    async def _upload_photo(self, upload: ImageUpload, store: MediaStore) -> str | None:
        try:
            url = await store.upload(upload.filename, upload.content, upload.content_type)
        except MediaUploadError as e:
            logger.warning(f"Photo upload failed for {upload.filename}: {e}")
            self.photos.error = UPLOAD_FAILED
            return None
        finally:
            self.photos.pending -= 1
            self.photos.busy = self.photos.pending > 0

        if url not in self.draft.photos:
            self.draft.photos.append(url)
            self._changed()
        return url

    def remove_photo(self, index: int) -> None:
        if not 0 <= index < len(self.draft.photos):
            raise IndexError(index)
        del self.draft.photos[index]
        self.photos.error = None
        self._changed()

"""Media Store: image uploads to Supabase Storage, returning public URLs."""

import logging
import secrets
import string
import time
from typing import Protocol

import httpx

from bursa_signup.config import settings

logger = logging.getLogger(__name__)

_KEY_ALPHABET = string.ascii_lowercase + string.digits


class MediaUploadError(Exception):
    """The store refused or failed an upload."""


class MediaStore(Protocol):
    async def upload(self, filename: str, content: bytes, content_type: str) -> str:
        """Store the file and return its public URL."""
        ...


def object_key(filename: str, folder: str | None = None) -> str:
    """``{folder}/{epoch_ms}-{random}.{ext}``; the original name is not kept."""
    folder = folder or settings.storage_folder
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    suffix = "".join(secrets.choice(_KEY_ALPHABET) for _ in range(6))
    return f"{folder}/{int(time.time() * 1000)}-{suffix}.{ext}"


class SupabaseMediaStore:
    """Uploads on behalf of the signed-in user (their token, the anon key)."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        access_token: str,
        bucket: str | None = None,
        folder: str | None = None,
    ):
        self.client = client
        self.access_token = access_token
        self.bucket = bucket or settings.storage_bucket
        self.folder = folder or settings.storage_folder

    def public_url(self, key: str) -> str:
        return f"{settings.supabase_url}/storage/v1/object/public/{self.bucket}/{key}"

    async def upload(self, filename: str, content: bytes, content_type: str) -> str:
        key = object_key(filename, self.folder)
        try:
            response = await self.client.post(
                f"{settings.supabase_url}/storage/v1/object/{self.bucket}/{key}",
                content=content,
                headers={
                    "Authorization": f"Bearer {self.access_token}",
                    "apikey": settings.supabase_anon_key,
                    "Content-Type": content_type,
                    "Cache-Control": f"max-age={settings.storage_cache_control}",
                    "x-upsert": "false",
                },
            )
        except httpx.HTTPError as e:
            raise MediaUploadError(str(e)) from e

        if response.is_error:
            raise MediaUploadError(
                f"Storage returned {response.status_code}: {response.text[:200]}"
            )

        logger.info(f"Uploaded {key} to bucket {self.bucket}")
        return self.public_url(key)

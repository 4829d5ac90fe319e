from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from starlette.concurrency import run_in_threadpool

from kaptan.config import Settings
from kaptan.errors import UpstreamStorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoredObject:
    url: str
    reference: str


class StorageBackend(ABC):
    @abstractmethod
    async def save(self, data: bytes, key: str, content_type: str) -> StoredObject: ...

    @abstractmethod
    async def delete(self, reference: str) -> bool: ...


class PlaceholderStorage(StorageBackend):
    """Used when no bucket is configured; nothing is stored."""

    async def save(self, data: bytes, key: str, content_type: str) -> StoredObject:
        logger.warning("Media storage not configured; skipping upload of %s", key)
        return StoredObject(url=f"/placeholder/{key}", reference=key)

    async def delete(self, reference: str) -> bool:
        logger.warning("Media storage not configured; skipping delete of %s", reference)
        return True


_CONTENT_TYPES: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".mp4": "video/mp4",
    ".pdf": "application/pdf",
}


class S3MediaStorage(StorageBackend):
    """S3 storage backend for media files served via a CDN."""

    def __init__(self, bucket_name: str, cdn_base_url: str, region: str = "eu-central-1"):
        import boto3

        self.bucket_name = bucket_name
        self.cdn_base_url = cdn_base_url.rstrip("/")
        self.client = boto3.client("s3", region_name=region)

    @staticmethod
    def guess_content_type(key: str) -> str:
        suffix = Path(key).suffix.lower()
        return _CONTENT_TYPES.get(suffix, "application/octet-stream")

    def public_url(self, key: str) -> str:
        if self.cdn_base_url:
            return f"{self.cdn_base_url}/{key}"
        return f"https://{self.bucket_name}.s3.amazonaws.com/{key}"

    async def save(self, data: bytes, key: str, content_type: str) -> StoredObject:
        try:
            await run_in_threadpool(
                self.client.put_object,
                Bucket=self.bucket_name,
                Key=key,
                Body=data,
                ContentType=content_type or self.guess_content_type(key),
            )
        except Exception as exc:
            logger.exception("Upload of %s to %s failed", key, self.bucket_name)
            raise UpstreamStorageError(f"Failed to upload {key}") from exc
        return StoredObject(url=self.public_url(key), reference=key)

    async def delete(self, reference: str) -> bool:
        try:
            await run_in_threadpool(
                self.client.delete_object, Bucket=self.bucket_name, Key=reference
            )
            return True
        except Exception:
            logger.exception("Failed to delete %s", reference)
            return False


def build_storage(settings: Settings) -> StorageBackend:
    if not settings.storage_configured:
        return PlaceholderStorage()
    return S3MediaStorage(
        bucket_name=settings.media_bucket,
        cdn_base_url=settings.media_cdn_base_url,
        region=settings.media_region,
    )

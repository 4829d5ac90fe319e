"""Media ingestion: decode, store the bytes, then record metadata."""

from __future__ import annotations

import base64
import binascii
import logging
import secrets
from dataclasses import dataclass

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from kaptan.errors import KaptanError, NotFound, ValidationError
from kaptan.observability import MEDIA_UPLOAD_BYTES
from kaptan.repositories import MediaRepository
from kaptan.schemas.media import MediaUpload
from kaptan.services.storage import StorageBackend

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "jpg"


@dataclass(frozen=True, slots=True)
class UploadResult:
    id: int
    url: str


def decode_payload(encoded: str, max_bytes: int) -> bytes:
    # Accept data URIs as sent by browser FileReader.
    if encoded.startswith("data:") and "," in encoded:
        encoded = encoded.split(",", 1)[1]
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Upload payload is not valid base64") from exc
    if not data:
        raise ValidationError("Upload payload is empty")
    if len(data) > max_bytes:
        raise ValidationError(f"Upload exceeds {max_bytes // (1024 * 1024)} MB limit")
    return data


def storage_key_for(filename: str) -> str:
    _, dot, ext = filename.rpartition(".")
    ext = ext.lower() if dot and ext else DEFAULT_EXTENSION
    return f"media/{secrets.token_urlsafe(16)}.{ext}"


async def ingest_upload(
    db: Session,
    storage: StorageBackend,
    upload: MediaUpload,
    *,
    uploaded_by: int | None,
    max_bytes: int,
) -> UploadResult:
    """Store an uploaded file and record its metadata.

    The object is written first; if the metadata insert then fails the object
    is removed again (best effort) and the insert error propagates.

    Raises:
        ValidationError: Bad or oversized payload.
        UpstreamStorageError: The object store failed; nothing was recorded.
    """
    data = await run_in_threadpool(decode_payload, upload.base64, max_bytes)
    key = storage_key_for(upload.filename)
    stored = await storage.save(data, key, upload.mime_type)

    try:
        media_id = await run_in_threadpool(
            MediaRepository(db).create,
            {
                "filename": upload.filename,
                "original_name": upload.filename,
                "mime_type": upload.mime_type,
                "size": len(data),
                "url": stored.url,
                "storage_key": stored.reference,
                "alt": upload.alt or None,
                "caption": upload.caption or None,
                "uploaded_by": uploaded_by,
            },
        )
    except KaptanError:
        logger.error("Metadata insert failed for %s; removing stored object", key)
        if not await storage.delete(stored.reference):
            logger.warning("Stored object %s is orphaned", stored.reference)
        raise

    MEDIA_UPLOAD_BYTES.observe(len(data))
    logger.info("Uploaded media id=%s key=%s size=%s", media_id, key, len(data))
    return UploadResult(id=media_id, url=stored.url)


async def remove_media(db: Session, storage: StorageBackend, media_id: int) -> bool:
    """Delete the metadata row, then the stored object (best effort)."""
    repo = MediaRepository(db)
    media = await run_in_threadpool(repo.get_by_id, media_id)
    if media is None:
        raise NotFound(f"media {media_id} not found")
    reference = media.storage_key
    await run_in_threadpool(repo.delete, media_id)
    if reference and not await storage.delete(reference):
        logger.warning("Could not delete stored object %s", reference)
    return True

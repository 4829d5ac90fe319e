from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from kaptan.auth import get_settings, require_admin
from kaptan.database import get_db
from kaptan.models.user import User
from kaptan.repositories import MediaRepository
from kaptan.repositories.media import DEFAULT_MEDIA_LIMIT
from kaptan.routers.common import RPC_PREFIX
from kaptan.schemas.common import IdInput, SuccessResult
from kaptan.schemas.media import MediaOut, MediaUpload, MediaUploadResult
from kaptan.security import limiter
from kaptan.services.media import ingest_upload, remove_media
from kaptan.services.storage import StorageBackend

router = APIRouter(prefix=RPC_PREFIX, tags=["media"])


def get_storage(request: Request) -> StorageBackend:
    return request.app.state.storage


@router.get("/media.list", response_model=list[MediaOut])
def list_media(
    limit: int = Query(DEFAULT_MEDIA_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return MediaRepository(db).list(limit=limit)


@router.get("/media.getById", response_model=MediaOut | None)
def get_media(id: int, db: Session = Depends(get_db)):
    return MediaRepository(db).get_by_id(id)


@router.post("/media.upload", response_model=MediaUploadResult)
@limiter.limit("30/minute")
async def upload_media(
    request: Request,
    payload: MediaUpload,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
    storage: StorageBackend = Depends(get_storage),
):
    """Decode a base64 upload, push it to object storage and record it."""
    result = await ingest_upload(
        db,
        storage,
        payload,
        uploaded_by=user.id,
        max_bytes=get_settings(request).max_upload_bytes,
    )
    return MediaUploadResult(id=result.id, url=result.url)


@router.post(
    "/media.delete", response_model=SuccessResult, dependencies=[Depends(require_admin)]
)
async def delete_media(
    payload: IdInput,
    db: Session = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
):
    await remove_media(db, storage, payload.id)
    return SuccessResult()

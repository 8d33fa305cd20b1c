"""
Thumbnail upload (owner only) and fetch (public).
Upload accepts image/jpeg and image/png up to settings.max_thumbnail_upload_bytes.
"""
import logging

from fastapi import APIRouter, Depends, File, Response, UploadFile
from sqlalchemy.orm import Session

from app.auth import get_current_user
from app.config import get_settings
from app.database import get_db
from app.errors import NotFoundError
from app.models.user import User
from app.services.thumbnail_store import Thumbnail, ThumbnailStore, get_thumbnail_store
from app.services.uploads import validate_upload
from app.services.videos import get_owned_video, get_video_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["thumbnails"])

THUMBNAIL_CONTENT_TYPES = {"image/jpeg", "image/png"}


@router.post("/thumbnail/{video_id}")
def upload_thumbnail(
    video_id: str,
    thumbnail: UploadFile = File(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: ThumbnailStore = Depends(get_thumbnail_store),
):
    logger.info("uploading thumbnail for video %s by user %s", video_id, user.id)

    media_type = validate_upload(
        thumbnail,
        get_settings().max_thumbnail_upload_bytes,
        THUMBNAIL_CONTENT_TYPES,
    )
    video = get_owned_video(db, video_id, user, "update")

    thumbnail.file.seek(0)
    data = thumbnail.file.read()
    video.thumbnail_url = store.save(video_id, Thumbnail(data=data, media_type=media_type))
    db.commit()
    return Response(status_code=200)


@router.get("/thumbnails/{video_id}")
def get_thumbnail(
    video_id: str,
    db: Session = Depends(get_db),
    store: ThumbnailStore = Depends(get_thumbnail_store),
):
    get_video_or_404(db, video_id)
    thumb = store.get(video_id)
    if thumb is None:
        raise NotFoundError("Thumbnail not found")
    return Response(
        content=thumb.data,
        media_type=thumb.media_type,
        headers={"Cache-Control": "no-store"},
    )

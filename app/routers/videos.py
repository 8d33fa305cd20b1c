"""
Video upload: validate, fast-start rewrite, push to the object store, record the key.
Pipeline runs inline; the request returns once the object is stored.
"""
import logging

from fastapi import APIRouter, Depends, File, Response, UploadFile
from sqlalchemy.orm import Session

from app.auth import get_current_user
from app.config import get_settings
from app.database import get_db
from app.models.user import User
from app.services.media_tool import fast_start_output_path, probe_aspect_ratio, process_video_for_fast_start
from app.services.object_store import ObjectStore, get_object_store
from app.services.uploads import random_file_name, temp_upload, validate_upload, write_upload
from app.services.videos import get_owned_video

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/video", tags=["videos"])

VIDEO_CONTENT_TYPES = {"video/mp4"}


@router.post("/{video_id}")
def upload_video(
    video_id: str,
    video: UploadFile = File(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
):
    record = get_owned_video(db, video_id, user, "upload")

    logger.info("uploading video %s by user %s", video_id, user.id)

    media_type = validate_upload(
        video,
        get_settings().max_video_upload_bytes,
        VIDEO_CONTENT_TYPES,
    )
    file_name = random_file_name(media_type)

    with temp_upload(file_name) as temp_paths:
        raw_path = temp_paths[0]
        write_upload(video, raw_path)

        aspect_ratio = probe_aspect_ratio(raw_path)
        key = f"{aspect_ratio}/{file_name}"

        # Registered before ffmpeg runs so a partial output is cleaned up too
        temp_paths.append(fast_start_output_path(raw_path))
        processed_path = process_video_for_fast_start(raw_path)

        store.upload_file(processed_path, key, content_type=media_type)

    record.video_url = key
    db.commit()
    logger.info("video %s stored as %s", video_id, key)
    return Response(status_code=200)

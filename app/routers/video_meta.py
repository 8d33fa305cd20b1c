from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.auth import get_current_user
from app.database import get_db
from app.errors import BadRequestError
from app.models.user import User
from app.models.video import Video
from app.schemas.video import VideoCreate, VideoResponse
from app.services.assets import video_to_signed_video
from app.services.object_store import ObjectStore, get_object_store
from app.services.videos import get_owned_video, get_video_or_404

router = APIRouter(prefix="/api/video_meta", tags=["video_meta"])


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
def create_video(
    body: VideoCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create an empty video record owned by the caller."""
    title = body.title.strip()
    description = body.description.strip()
    if not title or not description:
        raise BadRequestError("Missing title or description")
    video = Video(user_id=user.id, title=title, description=description)
    db.add(video)
    db.commit()
    db.refresh(video)
    return video


@router.get("", response_model=list[VideoResponse])
def list_my_videos(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
):
    """Caller's videos, newest first, each with a signed playback URL."""
    items = db.query(Video).filter(Video.user_id == user.id).order_by(Video.created_at.desc()).all()
    return [video_to_signed_video(store, v) for v in items]


@router.get("/{video_id}", response_model=VideoResponse)
def get_video(
    video_id: str,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
):
    video = get_video_or_404(db, video_id)
    return video_to_signed_video(store, video)


@router.delete("/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_video(
    video_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    video = get_owned_video(db, video_id, user, "delete")
    db.delete(video)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

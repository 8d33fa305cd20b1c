"""Video row lookups shared by the metadata, thumbnail and upload routers."""
from sqlalchemy.orm import Session

from app.errors import ForbiddenError, NotFoundError
from app.models.user import User
from app.models.video import Video


def get_video_or_404(db: Session, video_id: str) -> Video:
    video = db.query(Video).filter(Video.id == video_id).first()
    if not video:
        raise NotFoundError("Couldn't find video")
    return video


def get_owned_video(db: Session, video_id: str, user: User, action: str) -> Video:
    """404 if missing, 403 unless user owns it. action is used in the 403 message."""
    video = get_video_or_404(db, video_id)
    if video.user_id != user.id:
        raise ForbiddenError(f"Not authorized to {action} this video")
    return video

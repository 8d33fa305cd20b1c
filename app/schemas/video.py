from datetime import datetime
from pydantic import BaseModel


class VideoCreate(BaseModel):
    title: str = ""
    description: str = ""


class VideoResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: str
    thumbnail_url: str | None
    video_url: str | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

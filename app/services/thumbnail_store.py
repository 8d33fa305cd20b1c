"""
Thumbnail persistence keyed by video id. One backend is active per process
(settings.thumbnail_backend):

- disk: <assets_root>/<video_id><ext>, served by the /assets static mount
- memory: process-wide dict, no eviction, lost on restart

Re-uploading for the same video id overwrites the previous thumbnail.
"""
import logging
from dataclasses import dataclass
from typing import Protocol

from app.config import get_settings
from app.services.assets import api_url, asset_disk_path, asset_url, assets_root, media_type_to_ext

logger = logging.getLogger(__name__)

BACKEND_DISK = "disk"
BACKEND_MEMORY = "memory"


@dataclass
class Thumbnail:
    data: bytes
    media_type: str


class ThumbnailStore(Protocol):
    def save(self, video_id: str, thumbnail: Thumbnail) -> str:
        """Persist and return the URL clients should use for this thumbnail."""
        ...

    def get(self, video_id: str) -> Thumbnail | None:
        ...


class DiskThumbnailStore:
    """Writes thumbnails under the assets root."""

    def save(self, video_id: str, thumbnail: Thumbnail) -> str:
        file_name = f"{video_id}{media_type_to_ext(thumbnail.media_type)}"
        # Drop a stale file left by an earlier upload with another extension
        for old in assets_root().glob(f"{video_id}.*"):
            if old.name != file_name:
                old.unlink(missing_ok=True)
        path = asset_disk_path(file_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(thumbnail.data)
        return asset_url(file_name)

    def get(self, video_id: str) -> Thumbnail | None:
        for path in assets_root().glob(f"{video_id}.*"):
            if path.is_file():
                return Thumbnail(data=path.read_bytes(), media_type=f"image/{path.suffix.lstrip('.')}")
        return None


class MemoryThumbnailStore:
    """Dict keyed by video id. Unsynchronized."""

    def __init__(self):
        self._thumbnails: dict[str, Thumbnail] = {}

    def save(self, video_id: str, thumbnail: Thumbnail) -> str:
        self._thumbnails[video_id] = thumbnail
        return api_url(f"/api/thumbnails/{video_id}")

    def get(self, video_id: str) -> Thumbnail | None:
        return self._thumbnails.get(video_id)


_thumbnail_store: ThumbnailStore | None = None


def get_thumbnail_store() -> ThumbnailStore:
    """Lazy singleton for the configured backend; FastAPI dependency."""
    global _thumbnail_store
    if _thumbnail_store is None:
        backend = get_settings().thumbnail_backend
        if backend == BACKEND_MEMORY:
            _thumbnail_store = MemoryThumbnailStore()
        elif backend == BACKEND_DISK:
            _thumbnail_store = DiskThumbnailStore()
        else:
            raise ValueError(f"Unknown thumbnail backend: {backend!r}")
        logger.info("Thumbnail store: %s", backend)
    return _thumbnail_store

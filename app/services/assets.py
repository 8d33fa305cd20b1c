"""Path/URL helpers for local assets, temp uploads and object-store keys."""
import tempfile
from pathlib import Path

from app.config import get_settings
from app.models.video import Video
from app.schemas.video import VideoResponse
from app.services.object_store import ObjectStore

DEFAULT_EXT = ".bin"


def assets_root() -> Path:
    settings = get_settings()
    if settings.assets_root:
        return Path(settings.assets_root)
    return Path(__file__).resolve().parent.parent.parent / "assets"


def temp_root() -> Path:
    settings = get_settings()
    return Path(settings.temp_dir or tempfile.gettempdir())


def ensure_assets_dir() -> None:
    assets_root().mkdir(parents=True, exist_ok=True)


def media_type_to_ext(media_type: str) -> str:
    """'image/png' -> '.png'; anything not shaped type/subtype -> '.bin'."""
    parts = media_type.split("/")
    if len(parts) != 2:
        return DEFAULT_EXT
    return "." + parts[1]


def asset_disk_path(asset_path: str) -> Path:
    return assets_root() / asset_path


def asset_temp_path(asset_path: str) -> Path:
    return temp_root() / asset_path


def asset_url(asset_path: str) -> str:
    return f"http://localhost:{get_settings().port}/assets/{asset_path}"


def api_url(path: str) -> str:
    return f"http://localhost:{get_settings().port}/{path.lstrip('/')}"


def bucket_object_url(store: ObjectStore, key: str) -> str:
    return store.object_url(key)


def generate_presigned_url(store: ObjectStore, key: str, expires_in: int) -> str:
    return store.presign_get_url(key, expires_in)


def video_to_signed_video(store: ObjectStore, video: Video) -> VideoResponse:
    """Response payload with video_url (an object key) swapped for a short-lived signed URL."""
    payload = VideoResponse.model_validate(video)
    if not payload.video_url:
        return payload
    payload.video_url = generate_presigned_url(
        store, payload.video_url, get_settings().presign_expire_seconds
    )
    return payload

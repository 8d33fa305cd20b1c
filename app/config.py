from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./app.db"

    # JWT
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24  # 1 day

    # Frontend URL for CORS
    frontend_url: str = "http://localhost:3000"

    # Port the API is served on (used to build public asset URLs)
    port: int = 8091

    # Assets: absolute path to local asset folder (empty = backend/assets)
    assets_root: str = ""

    # Temp folder for raw uploads and fast-start output (empty = system temp dir)
    temp_dir: str = ""

    # Thumbnail persistence: "disk" (assets_root) or "memory" (lost on restart)
    thumbnail_backend: str = "disk"

    # Upload ceilings (bytes)
    max_thumbnail_upload_bytes: int = 10 << 20  # 10 MiB
    max_video_upload_bytes: int = 1 << 30  # 1 GiB

    # S3 object store
    s3_bucket: str = ""
    s3_region: str = "us-east-1"
    s3_endpoint_url: str = ""  # e.g. http://localhost:9000 for MinIO; empty = AWS
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""

    # Signed playback URL lifetime (seconds)
    presign_expire_seconds: int = 60

    # FFmpeg / FFprobe
    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    media_tool_timeout_seconds: int = 600

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()

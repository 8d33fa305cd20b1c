"""Shared helpers for multipart upload validation and temp files (used by thumbnail and video routers)."""
import secrets
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import UploadFile

from app.errors import BadRequestError
from app.services.assets import asset_temp_path, media_type_to_ext

CHUNK_SIZE = 1024 * 1024  # 1 MB


def upload_size(file: UploadFile) -> int:
    if file.size is not None:
        return file.size
    file.file.seek(0, 2)
    size = file.file.tell()
    file.file.seek(0)
    return size


def upload_media_type(file: UploadFile) -> str:
    return (file.content_type or "").split(";")[0].strip().lower()


def validate_upload(
    file: UploadFile,
    max_bytes: int,
    allowed_types: set[str],
) -> str:
    """Fail fast on the first violation. Returns the normalized media type."""
    if upload_size(file) > max_bytes:
        raise BadRequestError("Max upload size exceeded")
    media_type = upload_media_type(file)
    if media_type not in allowed_types:
        raise BadRequestError("Not valid MIME type")
    return media_type


def random_file_name(media_type: str) -> str:
    """32 random bytes, URL-safe base64, plus the extension for media_type."""
    return f"{secrets.token_urlsafe(32)}{media_type_to_ext(media_type)}"


def write_upload(file: UploadFile, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    file.file.seek(0)
    with path.open("wb") as f:
        while chunk := file.file.read(CHUNK_SIZE):
            f.write(chunk)


@contextmanager
def temp_upload(file_name: str) -> Iterator[list[Path]]:
    """
    Yield a list of temp paths seeded with <temp_dir>/<file_name>.
    Every path in the list (callers append derived outputs) is removed on exit,
    whether the block returns or raises.
    """
    paths = [asset_temp_path(file_name)]
    try:
        yield paths
    finally:
        for path in paths:
            path.unlink(missing_ok=True)

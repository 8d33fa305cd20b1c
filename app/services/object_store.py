"""
S3 (or S3-compatible, e.g. MinIO) object store for final video assets.
Objects stay private; playback goes through short-lived presigned GET URLs.
"""
import logging
from pathlib import Path
from typing import Any

import boto3
from botocore.config import Config as BotoConfig

from app.config import get_settings

logger = logging.getLogger(__name__)


class ObjectStore:
    """Thin wrapper over a boto3 S3 client bound to one bucket."""

    def __init__(self, client: Any, bucket: str, region: str):
        self._client = client
        self.bucket = bucket
        self.region = region

    def upload_file(self, file_path: Path, key: str, content_type: str) -> None:
        with open(file_path, "rb") as f:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=f,
                ContentType=content_type,
            )
        logger.info("Uploaded %s to s3://%s/%s", file_path.name, self.bucket, key)

    def presign_get_url(self, key: str, expires_in: int) -> str:
        return self._client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket, "Key": key},
            ExpiresIn=expires_in,
        )

    def object_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"


_object_store: ObjectStore | None = None


def _build_client() -> Any:
    settings = get_settings()
    client_kwargs = {
        "service_name": "s3",
        "region_name": settings.s3_region,
    }
    # Empty = default boto3 credential chain (env, profile, instance role)
    if settings.aws_access_key_id and settings.aws_secret_access_key:
        client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
        client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
    if settings.s3_endpoint_url:
        client_kwargs["endpoint_url"] = settings.s3_endpoint_url
        client_kwargs["config"] = BotoConfig(
            signature_version="s3v4",
            s3={"addressing_style": "path"},
        )
    return boto3.client(**client_kwargs)


def get_object_store() -> ObjectStore:
    """Lazy singleton; FastAPI dependency (override in tests)."""
    global _object_store
    if _object_store is None:
        settings = get_settings()
        _object_store = ObjectStore(_build_client(), settings.s3_bucket, settings.s3_region)
        logger.info("Object store ready: bucket=%s region=%s", settings.s3_bucket, settings.s3_region)
    return _object_store

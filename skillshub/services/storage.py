"""
Storage abstraction for S3-compatible object storage and in-memory testing.

Objects are private; clients receive either a CDN URL or a short-lived
presigned GET URL.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional, Protocol

import boto3
from botocore.config import Config

from skillshub.core.config import Settings, get_settings
from skillshub.models.enums import FileType

logger = logging.getLogger(__name__)

FOLDERS = {
    FileType.cv.value: "applications/cv",
    FileType.cover_letter.value: "applications/cover-letters",
    FileType.resume.value: "profiles/resumes",
    FileType.portfolio.value: "profiles/portfolio",
    FileType.profile_photo.value: "profiles/photos",
    FileType.company_logo.value: "companies/logos",
    FileType.other.value: "misc",
}

PRESIGN_EXPIRES_SECONDS = 3600


class StorageNotConfiguredError(RuntimeError):
    """Raised when object storage credentials are missing."""


@dataclass
class StoredObject:
    key: str
    etag: Optional[str]
    size: int


def build_object_key(file_type: str, original_name: Optional[str]) -> str:
    """Bucket key: {folder}/{uuid}.{ext}"""
    folder = FOLDERS.get(file_type, FOLDERS[FileType.other.value])
    ext = "bin"
    if original_name and "." in original_name:
        ext = original_name.rsplit(".", 1)[1].lower() or "bin"
    return f"{folder}/{uuid.uuid4()}.{ext}"


class StorageClient(Protocol):
    """Defines the operations the API needs from object storage."""

    def upload(self, key: str, body: bytes, content_type: str, original_name: Optional[str] = None) -> StoredObject:
        ...

    def presign_get(self, key: str, expires_in: int = PRESIGN_EXPIRES_SECONDS) -> str:
        ...

    def delete(self, key: str) -> None:
        ...


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    base_url: str = "https://storage.test"
    stored_objects: Dict[str, dict] = field(default_factory=dict)

    def upload(self, key: str, body: bytes, content_type: str, original_name: Optional[str] = None) -> StoredObject:
        etag = uuid.uuid4().hex
        self.stored_objects[key] = {
            "body": body,
            "content_type": content_type,
            "metadata": {"originalName": original_name or "", "uploadedAt": _now_iso()},
            "etag": etag,
        }
        return StoredObject(key=key, etag=etag, size=len(body))

    def presign_get(self, key: str, expires_in: int = PRESIGN_EXPIRES_SECONDS) -> str:
        return f"{self.base_url}/{key}?op=get&expires={expires_in}"

    def delete(self, key: str) -> None:
        self.stored_objects.pop(key, None)


@dataclass
class S3StorageClient:
    """
    boto3-backed client for AWS S3 or any S3-compatible endpoint.
    """

    bucket: str
    region: str
    access_key_id: str
    secret_access_key: str
    endpoint: Optional[str] = None
    force_path_style: bool = False

    def __post_init__(self):
        config = Config(
            s3={"addressing_style": "path" if self.force_path_style else "auto"},
            signature_version="s3v4",
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )

    def upload(self, key: str, body: bytes, content_type: str, original_name: Optional[str] = None) -> StoredObject:
        response = self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            ACL="private",
            Metadata={"originalName": original_name or "", "uploadedAt": _now_iso()},
        )
        etag = (response.get("ETag") or "").replace('"', "") or None
        return StoredObject(key=key, etag=etag, size=len(body))

    def presign_get(self, key: str, expires_in: int = PRESIGN_EXPIRES_SECONDS) -> str:
        return self._client.generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": self.bucket, "Key": key},
            ExpiresIn=expires_in,
        )

    def delete(self, key: str) -> None:
        self._client.delete_object(Bucket=self.bucket, Key=key)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_storage_client(settings: Settings) -> StorageClient:
    if settings.use_in_memory_storage:
        return InMemoryStorageClient()

    if not settings.aws_access_key_id or not settings.aws_secret_access_key:
        raise StorageNotConfiguredError(
            "S3 storage is not configured. Please set AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY."
        )

    return S3StorageClient(
        bucket=settings.s3_bucket_name,
        region=settings.aws_region,
        access_key_id=settings.aws_access_key_id,
        secret_access_key=settings.aws_secret_access_key,
        endpoint=settings.s3_endpoint,
        force_path_style=settings.s3_force_path_style,
    )


_storage_client: Optional[StorageClient] = None


def get_storage_client() -> StorageClient:
    """Get singleton storage client."""
    global _storage_client
    if _storage_client is None:
        _storage_client = build_storage_client(get_settings())
    return _storage_client


def set_storage_client(client: Optional[StorageClient]) -> None:
    """Override (or reset with None) the singleton, used by tests."""
    global _storage_client
    _storage_client = client


def get_file_url(key: str, expires_in: int = PRESIGN_EXPIRES_SECONDS) -> str:
    """CDN URL when configured, otherwise a presigned GET URL."""
    settings = get_settings()
    if settings.cdn_url:
        return f"{settings.cdn_url.rstrip('/')}/{key}"
    return get_storage_client().presign_get(key, expires_in)

"""
File Service - object storage upload plus FileObject bookkeeping.
"""

import logging
from typing import Optional

from skillshub.models import Application, EmployerProfile, FileObject, PortfolioItem, SeekerProfile, User
from skillshub.services.storage import build_object_key, get_storage_client, get_file_url

logger = logging.getLogger(__name__)


def store_file(
    db,
    content: bytes,
    filename: Optional[str],
    content_type: str,
    file_type: str,
    user_id: Optional[int]
) -> FileObject:
    """
    Upload bytes to storage and record a FileObject row.

    Must be called inside an open get_db_session() block; the row is
    flushed so its id is available to the caller.
    """
    key = build_object_key(file_type, filename)
    stored = get_storage_client().upload(key, content, content_type, original_name=filename)

    file_obj = FileObject(
        bucket_key=stored.key,
        content_type=content_type,
        size_bytes=stored.size,
        etag=stored.etag,
        created_by_id=user_id,
    )
    db.add(file_obj)
    db.flush()

    logger.info(f"Stored {file_type} file {file_obj.id} ({stored.size} bytes) for user {user_id}")
    return file_obj


def file_in_use(db, file_id: str) -> bool:
    """True while any application, profile, portfolio item or user still points at the file."""
    references = [
        Application.cv_file_id,
        Application.cover_letter_file_id,
        SeekerProfile.resume_file_id,
        PortfolioItem.file_id,
        EmployerProfile.company_logo,
        User.profile_photo_file_id,
    ]
    return any(
        db.query(column).filter(column == file_id).first() is not None
        for column in references
    )


def discard_file(db, file_id: Optional[str], owner_id: int) -> bool:
    """
    Delete a replaced or orphaned file from storage and drop its row.

    Only the uploader's own files are removed, and only once nothing
    references them any more. Call after the old reference is cleared.
    """
    if not file_id:
        return False
    db.flush()
    file_obj = db.get(FileObject, file_id)
    if not file_obj or file_obj.created_by_id != owner_id or file_in_use(db, file_id):
        return False

    get_storage_client().delete(file_obj.bucket_key)
    db.delete(file_obj)
    logger.info(f"Discarded file {file_id} ({file_obj.bucket_key})")
    return True


def file_url(file_obj: FileObject) -> str:
    return get_file_url(file_obj.bucket_key)


def file_summary(file_obj: Optional[FileObject]) -> Optional[dict]:
    if not file_obj:
        return None
    return {
        "id": file_obj.id,
        "bucketKey": file_obj.bucket_key,
        "contentType": file_obj.content_type,
        "sizeBytes": file_obj.size_bytes,
    }

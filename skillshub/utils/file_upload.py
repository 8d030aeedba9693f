"""
File Upload Utility - Read and validate uploaded files.

Default limits (overridable via MAX_FILE_SIZE / ALLOWED_FILE_TYPES):
- Documents: PDF, DOC, DOCX, TXT
- Images: JPEG, PNG, WEBP

Max file size: 5MB
"""

from typing import List, Optional, Tuple
from fastapi import UploadFile, HTTPException

from skillshub.core.config import get_settings

IMAGE_TYPES = ["image/jpeg", "image/jpg", "image/png", "image/webp"]
IMAGE_MAX_SIZE_BYTES = 5 * 1024 * 1024
UPLOAD_CHUNK_SIZE = 256 * 1024


def _size_in_mb(size_bytes: int) -> str:
    return f"{size_bytes / (1024 * 1024):g}"


def _too_large(max_size: int) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail=f"File size exceeds maximum allowed size of {_size_in_mb(max_size)}MB"
    )


def validate_file(
    size_bytes: int,
    content_type: Optional[str],
    max_size: Optional[int] = None,
    allowed_types: Optional[List[str]] = None
) -> None:
    """
    Check size and MIME type of an upload.

    Raises:
        HTTPException(400) when the file is too large or of a disallowed type
    """
    settings = get_settings()
    max_size = max_size if max_size is not None else settings.max_file_size
    allowed_types = allowed_types if allowed_types is not None else settings.allowed_file_type_list

    if size_bytes > max_size:
        raise _too_large(max_size)

    if not content_type or content_type not in allowed_types:
        raise HTTPException(
            status_code=400,
            detail=f"File type {content_type} is not allowed. Allowed types: {', '.join(allowed_types)}"
        )


async def read_upload(
    file: UploadFile,
    max_size: Optional[int] = None,
    allowed_types: Optional[List[str]] = None
) -> Tuple[bytes, str, str]:
    """
    Read an uploaded file and validate it.

    Args:
        file: FastAPI UploadFile

    Returns:
        Tuple of (content, filename, content_type)

    Raises:
        HTTPException on validation errors
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    settings = get_settings()
    max_size = max_size if max_size is not None else settings.max_file_size
    content_type = file.content_type or "application/octet-stream"

    chunks = []
    size = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_SIZE)
        if not chunk:
            break
        size += len(chunk)
        if size > max_size:
            raise _too_large(max_size)
        chunks.append(chunk)

    validate_file(size, content_type, max_size, allowed_types)
    return b"".join(chunks), file.filename, content_type


async def read_image_upload(file: UploadFile) -> Tuple[bytes, str, str]:
    """Images only (JPEG/PNG/WEBP, 5MB)."""
    return await read_upload(file, max_size=IMAGE_MAX_SIZE_BYTES, allowed_types=IMAGE_TYPES)

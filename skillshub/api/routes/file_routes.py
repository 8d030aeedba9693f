"""
File Routes

POST /upload - Upload a document (cv, cover-letter, resume, portfolio, profile-photo, other)
GET /files/{file_id} - Redirect to a short-lived download URL
POST /profile/photo - Upload profile photo (images only)
GET /profile/photo/{file_id} - Get photo URL
POST /profile/company-logo - Upload company logo (employer only, images only)
"""

import logging

from fastapi import APIRouter, HTTPException, Depends, UploadFile, File, Form
from fastapi.responses import RedirectResponse

from skillshub.db.database import get_db_session
from skillshub.core.auth import get_current_user
from skillshub.models import FileObject, User, EmployerProfile
from skillshub.models.enums import FileType, UserRole
from skillshub.services.file_service import discard_file, store_file, file_url
from skillshub.utils.file_upload import read_upload, read_image_upload
from skillshub.schemas.schemas import (
    UPLOADABLE_FILE_TYPES, UploadResponse, ImageUploadResponse, FileUrlResponse
)

router = APIRouter(tags=["Files"])
logger = logging.getLogger(__name__)


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(..., description="File to upload (max 5MB)"),
    file_type: str = Form(..., alias="fileType"),
    user: dict = Depends(get_current_user)
):
    """
    Upload a file to object storage.

    The stored object is private; use GET /files/{file_id} to download.
    """
    allowed = [t.value for t in UPLOADABLE_FILE_TYPES]
    if file_type not in allowed:
        raise HTTPException(status_code=400, detail=f"Invalid file type. Must be one of: {', '.join(allowed)}")

    content, filename, content_type = await read_upload(file)

    with get_db_session() as db:
        file_obj = store_file(db, content, filename, content_type, file_type, user["user_id"])

    return UploadResponse(
        file_id=file_obj.id,
        bucket_key=file_obj.bucket_key,
        size_bytes=file_obj.size_bytes,
        message="File uploaded successfully"
    )


@router.get("/files/{file_id}")
async def get_file(file_id: str, user: dict = Depends(get_current_user)):
    """Redirect to the file's CDN or presigned URL."""
    with get_db_session() as db:
        file_obj = db.get(FileObject, file_id)

    if not file_obj:
        raise HTTPException(status_code=404, detail="File not found")

    return RedirectResponse(url=file_url(file_obj), status_code=307)


@router.post("/profile/photo", response_model=ImageUploadResponse)
async def upload_profile_photo(
    file: UploadFile = File(..., description="JPEG, PNG or WEBP (max 5MB)"),
    user: dict = Depends(get_current_user)
):
    """Upload and set the current user's profile photo; the replaced one is discarded."""
    content, filename, content_type = await read_image_upload(file)

    with get_db_session() as db:
        file_obj = store_file(db, content, filename, content_type, FileType.profile_photo.value, user["user_id"])
        row = db.get(User, user["user_id"])
        previous = row.profile_photo_file_id
        row.profile_photo_file_id = file_obj.id
        discard_file(db, previous, user["user_id"])

    return ImageUploadResponse(
        file_id=file_obj.id,
        bucket_key=file_obj.bucket_key,
        url=file_url(file_obj),
        message="Profile photo uploaded successfully"
    )


@router.get("/profile/photo/{file_id}", response_model=FileUrlResponse)
async def get_profile_photo(file_id: str):
    """Get a viewable URL for a photo."""
    with get_db_session() as db:
        file_obj = db.get(FileObject, file_id)

    if not file_obj:
        raise HTTPException(status_code=404, detail="File not found")

    return FileUrlResponse(url=file_url(file_obj), bucket_key=file_obj.bucket_key, content_type=file_obj.content_type)


@router.post("/profile/company-logo", response_model=ImageUploadResponse)
async def upload_company_logo(
    file: UploadFile = File(..., description="JPEG, PNG or WEBP (max 5MB)"),
    user: dict = Depends(get_current_user)
):
    """Upload the employer's company logo, creating the profile if missing."""
    if user["role"] != UserRole.employer.value:
        raise HTTPException(status_code=403, detail="Only employers can upload company logos")

    content, filename, content_type = await read_image_upload(file)

    with get_db_session() as db:
        file_obj = store_file(db, content, filename, content_type, FileType.company_logo.value, user["user_id"])
        profile = db.query(EmployerProfile).filter(EmployerProfile.user_id == user["user_id"]).first()
        if profile:
            previous = profile.company_logo
            profile.company_logo = file_obj.id
            discard_file(db, previous, user["user_id"])
        else:
            db.add(EmployerProfile(user_id=user["user_id"], org_name="Company", company_logo=file_obj.id))

    logger.info(f"Company logo {file_obj.id} set for user {user['user_id']}")
    return ImageUploadResponse(
        file_id=file_obj.id,
        bucket_key=file_obj.bucket_key,
        url=file_url(file_obj),
        message="Company logo uploaded successfully"
    )

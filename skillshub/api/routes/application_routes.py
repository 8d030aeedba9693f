"""
Application Routes

POST /applications/apply - Apply to an open job (job seeker only)
"""

import logging

from fastapi import APIRouter, HTTPException, Depends

from skillshub.db.database import get_db_session
from skillshub.core.auth import get_current_user
from skillshub.models import Application, FileObject, Job, SeekerProfile, User
from skillshub.models.enums import ApplicationStatus, JobStatus, NotificationType, UserRole
from skillshub.services import serializers
from skillshub.services.notification_service import notify
from skillshub.schemas.schemas import ApplyRequest

router = APIRouter(prefix="/applications", tags=["Applications"])
logger = logging.getLogger(__name__)


def _require_file(db, file_id: str, label: str) -> FileObject:
    file_obj = db.get(FileObject, file_id)
    if not file_obj:
        raise HTTPException(status_code=404, detail=f"{label} file not found")
    return file_obj


@router.post("/apply", status_code=201)
async def apply_to_job(data: ApplyRequest, user: dict = Depends(get_current_user)):
    """
    Apply to a job.

    The CV falls back to the profile resume; with neither, the client is
    told to upload one (requiresResume).
    """
    if user["role"] != UserRole.job_seeker.value:
        raise HTTPException(status_code=403, detail="Only job seekers can apply for jobs")

    job_id = data.job_id
    cv_file_id = data.cv_file_id
    cover_letter_file_id = data.cover_letter_file_id

    with get_db_session() as db:
        profile = db.query(SeekerProfile).filter(SeekerProfile.user_id == user["user_id"]).first()
        if not profile:
            raise HTTPException(status_code=400, detail="Please complete your profile before applying")

        job = db.get(Job, job_id)
        if not job:
            raise HTTPException(status_code=404, detail="Job not found")
        if job.status != JobStatus.open.value:
            raise HTTPException(status_code=400, detail="This job is no longer accepting applications")

        existing = (
            db.query(Application)
            .filter(Application.job_id == job.id, Application.seeker_id == profile.id)
            .first()
        )
        if existing:
            raise HTTPException(status_code=400, detail="You have already applied for this job")

        cv_file_id = cv_file_id or profile.resume_file_id
        if not cv_file_id:
            raise HTTPException(status_code=400, detail={
                "error": "Please upload your CV or add a resume to your profile before applying",
                "requiresResume": True,
            })
        _require_file(db, cv_file_id, "CV")
        if cover_letter_file_id:
            _require_file(db, cover_letter_file_id, "Cover letter")

        application = Application(
            job_id=job.id,
            seeker_id=profile.id,
            status=ApplicationStatus.applied.value,
            cv_file_id=cv_file_id,
            cover_letter_file_id=cover_letter_file_id,
            cover_letter_text=data.cover_letter_text,
            expected_pay=data.expected_pay,
        )
        db.add(application)

        applicant = db.get(User, user["user_id"])
        notify(
            db, job.employer.user_id, NotificationType.application_received,
            title="New Application Received",
            message=f"{applicant.first_name} {applicant.last_name} applied for: {job.title}",
            link=f"/dashboard/employer/applications?jobId={job.id}",
        )
        db.flush()

        logger.info(f"Application {application.id}: seeker {profile.id} -> job {job.id}")
        return {
            "success": True,
            "message": "Application submitted successfully",
            "application": serializers.application_summary(application),
        }

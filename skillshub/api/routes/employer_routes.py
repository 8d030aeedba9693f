"""
Employer Routes

GET /employer/jobs - List own jobs with application counts (paginated)
POST /employer/jobs - Create job posting
GET /employer/jobs/{job_id} - Get own job with its applications
PATCH /employer/jobs/{job_id} - Update job (replaces skills when given)
DELETE /employer/jobs/{job_id} - Delete job
GET /employer/applications - Applications received (filter by status/job, paginated)
GET /employer/applications/{application_id} - Application details
PATCH /employer/applications/{application_id} - Update application status
DELETE /employer/applications/{application_id} - Remove application
POST /employer/recruit - Invite a talent to a job (shortlist + direct message)
GET /employer/stats - Hiring dashboard counters
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Query

from skillshub.db.database import get_db_session
from skillshub.core.auth import get_current_employer
from skillshub.models import (
    Application, Contract, EmployerProfile, Job, SeekerProfile, Skill, SkillOnJob, User
)
from skillshub.models.enums import (
    ApplicationStatus, ContractStatus, JobStatus, MilestoneStatus, NotificationType
)
from skillshub.services import serializers
from skillshub.services.messaging_service import get_or_create_thread, send_message
from skillshub.services.notification_service import notify
from skillshub.utils.helpers import safe_trim, parse_date, full_name
from skillshub.schemas.schemas import (
    JobWrite, ApplicationStatusUpdate, RecruitRequest, Pagination, MessageResponse
)

router = APIRouter(prefix="/employer", tags=["Employer"])
logger = logging.getLogger(__name__)

TEXT_FIELDS = [
    "salary_range", "location",
    "project_duration", "budget", "deliverables",
    "internship_duration", "stipend", "learning_objectives",
    "hours_per_week", "schedule", "hourly_rate",
    "work_arrangement", "probation_period", "benefits",
]
DATE_FIELDS = ["deadline", "start_date", "start_date_full_time"]


def _pagination(total: int, limit: int, offset: int) -> dict:
    return Pagination(total=total, limit=limit, offset=offset, has_more=offset + limit < total).model_dump(by_alias=True)


def _apply_job_fields(job: Job, data: JobWrite) -> None:
    job.title = data.title.strip()
    job.description = data.description.strip()
    job.type = data.type.value
    if data.status is not None:
        job.status = data.status.value
    for name in TEXT_FIELDS:
        setattr(job, name, safe_trim(getattr(data, name)))
    for name in DATE_FIELDS:
        setattr(job, name, parse_date(getattr(data, name)))


def _replace_skills(db, job: Job, data: JobWrite) -> None:
    entries = data.skill_entries()
    wanted = {e.skill_id for e in entries}
    if wanted:
        found = {s.id for s in db.query(Skill.id).filter(Skill.id.in_(wanted)).all()}
        missing = wanted - found
        if missing:
            raise HTTPException(status_code=400, detail=f"Unknown skill IDs: {sorted(missing)}")

    job.skills.clear()
    db.flush()
    seen = set()
    for entry in entries:
        if entry.skill_id in seen:
            continue
        seen.add(entry.skill_id)
        job.skills.append(SkillOnJob(skill_id=entry.skill_id, required=entry.required))


def _get_own_job(db, job_id: int, employer_profile_id: int) -> Job:
    job = db.query(Job).filter(Job.id == job_id, Job.employer_id == employer_profile_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


def _get_own_application(db, application_id: int, employer_profile_id: int) -> Application:
    application = db.get(Application, application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    if application.job.employer_id != employer_profile_id:
        raise HTTPException(status_code=403, detail="You don't have permission to access this application")
    return application


def _job_with_counts(job: Job) -> dict:
    data = serializers.job_summary(job)
    data["applicationCount"] = len(job.applications)
    data["applicationsByStatus"] = {
        status.name: sum(1 for a in job.applications if a.status == status.value)
        for status in ApplicationStatus
    }
    contract = job.contracts[0] if job.contracts else None
    data["hasContract"] = contract is not None
    data["contractSeeker"] = None
    if contract:
        seeker_user = contract.seeker.user
        data["contractSeeker"] = {
            "id": seeker_user.id,
            "name": seeker_user.full_name,
            "email": seeker_user.email,
        }
    return data


# ============================================================
# JOBS
# ============================================================

@router.get("/jobs")
async def list_my_jobs(
    status: Optional[JobStatus] = Query(None),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    employer: dict = Depends(get_current_employer)
):
    """List the employer's jobs, newest first."""
    with get_db_session() as db:
        query = db.query(Job).filter(Job.employer_id == employer["employer_profile_id"])
        if status:
            query = query.filter(Job.status == status.value)

        total = query.count()
        jobs = query.order_by(Job.created_at.desc(), Job.id.desc()).offset(offset).limit(limit).all()

        return {
            "jobs": [_job_with_counts(job) for job in jobs],
            "pagination": _pagination(total, limit, offset),
        }


@router.post("/jobs", status_code=201)
async def create_job(data: JobWrite, employer: dict = Depends(get_current_employer)):
    """Create a new job posting. New jobs are OPEN unless a status is given."""
    with get_db_session() as db:
        job = Job(employer_id=employer["employer_profile_id"], status=JobStatus.open.value)
        _apply_job_fields(job, data)
        db.add(job)
        db.flush()
        _replace_skills(db, job, data)
        db.flush()

        logger.info(f"Job {job.id} created by employer {employer['employer_profile_id']}")
        return {"success": True, "job": serializers.job_summary(job), "message": "Job created successfully"}


@router.get("/jobs/{job_id}")
async def get_my_job(job_id: int, employer: dict = Depends(get_current_employer)):
    """Get one of the employer's jobs with its applications."""
    with get_db_session() as db:
        job = _get_own_job(db, job_id, employer["employer_profile_id"])
        data = _job_with_counts(job)
        data["applications"] = [
            serializers.application_for_employer(a)
            for a in sorted(job.applications, key=lambda a: a.created_at, reverse=True)
        ]
        return {"job": data}


@router.patch("/jobs/{job_id}")
async def update_my_job(job_id: int, data: JobWrite, employer: dict = Depends(get_current_employer)):
    """Update a job. The skill list is replaced only when skills are sent."""
    with get_db_session() as db:
        job = _get_own_job(db, job_id, employer["employer_profile_id"])
        _apply_job_fields(job, data)
        if data.skills is not None:
            _replace_skills(db, job, data)
        db.flush()
        return {"success": True, "job": serializers.job_summary(job), "message": "Job updated successfully"}


@router.delete("/jobs/{job_id}", response_model=MessageResponse)
async def delete_my_job(job_id: int, employer: dict = Depends(get_current_employer)):
    """Delete a job along with its applications."""
    with get_db_session() as db:
        job = _get_own_job(db, job_id, employer["employer_profile_id"])
        db.delete(job)

    logger.info(f"Job {job_id} deleted by employer {employer['employer_profile_id']}")
    return MessageResponse(message="Job deleted successfully")


# ============================================================
# APPLICATIONS
# ============================================================

@router.get("/applications")
async def list_applications(
    status: Optional[ApplicationStatus] = Query(None),
    job_id: Optional[int] = Query(None, alias="jobId"),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    employer: dict = Depends(get_current_employer)
):
    """Applications received across the employer's jobs, newest first."""
    with get_db_session() as db:
        query = (
            db.query(Application)
            .join(Job, Application.job_id == Job.id)
            .filter(Job.employer_id == employer["employer_profile_id"])
        )
        if job_id is not None:
            _get_own_job(db, job_id, employer["employer_profile_id"])
            query = query.filter(Application.job_id == job_id)
        if status:
            query = query.filter(Application.status == status.value)

        total = query.count()
        applications = (
            query.order_by(Application.created_at.desc(), Application.id.desc())
            .offset(offset).limit(limit).all()
        )
        return {
            "applications": [serializers.application_for_employer(a) for a in applications],
            "pagination": _pagination(total, limit, offset),
        }


@router.get("/applications/{application_id}")
async def get_application(application_id: int, employer: dict = Depends(get_current_employer)):
    with get_db_session() as db:
        application = _get_own_application(db, application_id, employer["employer_profile_id"])
        data = serializers.application_for_employer(application)
        data["applicant"] = serializers.applicant(application.seeker, skill_limit=None)
        return {"application": data}


@router.patch("/applications/{application_id}")
async def update_application_status(
    application_id: int,
    data: ApplicationStatusUpdate,
    employer: dict = Depends(get_current_employer)
):
    """Move an application to APPLIED, SHORTLISTED, HIRED or REJECTED and notify the applicant."""
    with get_db_session() as db:
        application = _get_own_application(db, application_id, employer["employer_profile_id"])
        previous = application.status
        application.status = data.status.value

        if previous != application.status:
            notify(
                db, application.seeker.user_id, NotificationType.application_status,
                title="Application Update",
                message=f"Your application for {application.job.title} is now {application.status.lower()}",
                link="/dashboard/seeker/applications",
            )
        db.flush()
        return {
            "success": True,
            "message": "Application status updated",
            "application": serializers.application_summary(application),
        }


@router.delete("/applications/{application_id}", response_model=MessageResponse)
async def delete_application(application_id: int, employer: dict = Depends(get_current_employer)):
    with get_db_session() as db:
        application = _get_own_application(db, application_id, employer["employer_profile_id"])
        db.delete(application)

    return MessageResponse(message="Application deleted successfully")


# ============================================================
# RECRUITMENT
# ============================================================

def _recruitment_message(first_name: Optional[str], job_title: str, note: Optional[str],
                         has_resume: bool, contact_email: Optional[str], employer_name: str) -> str:
    text = f"Hi {first_name or 'there'},\n\n"
    if note:
        text += f"{note}\n\n"
    text += f"I'd like to invite you to apply for the position: {job_title}."
    if not has_resume:
        if contact_email:
            text += (f"\n\nPlease upload your CV to your profile or send it to {contact_email} "
                     "to proceed with your application.")
        else:
            text += "\n\nPlease upload your CV to your profile to proceed with your application."
    text += f"\n\nBest regards,\n{employer_name}"
    return text


@router.post("/recruit")
async def recruit_talent(data: RecruitRequest, employer: dict = Depends(get_current_employer)):
    """
    Invite a talent to one of the employer's jobs.

    Existing applications are shortlisted (unless already SHORTLISTED/HIRED);
    otherwise a SHORTLISTED application is created when the talent has a
    resume. The talent always receives a direct message and a notification.
    """
    note = safe_trim(data.message)

    with get_db_session() as db:
        job = _get_own_job(db, data.job_id, employer["employer_profile_id"])
        talent = db.get(SeekerProfile, data.talent_id)
        if not talent:
            raise HTTPException(status_code=404, detail="Talent not found")

        application = (
            db.query(Application)
            .filter(Application.job_id == job.id, Application.seeker_id == talent.id)
            .first()
        )
        if application:
            if application.status not in (ApplicationStatus.shortlisted.value, ApplicationStatus.hired.value):
                application.status = ApplicationStatus.shortlisted.value
        elif talent.resume_file_id:
            application = Application(
                job_id=job.id,
                seeker_id=talent.id,
                status=ApplicationStatus.shortlisted.value,
                cv_file_id=talent.resume_file_id,
                cover_letter_text=note or f"You have been invited to apply for the position: {job.title}",
            )
            db.add(application)

        employer_user = db.get(User, employer["user_id"])
        profile = db.get(EmployerProfile, employer["employer_profile_id"])
        employer_name = (
            profile.org_name
            or full_name(employer_user.first_name, employer_user.last_name)
            or "An employer"
        )
        has_resume = bool(talent.resume_file_id)

        thread = get_or_create_thread(db, employer_user.id, talent.user_id)
        send_message(
            db, thread, employer_user,
            _recruitment_message(talent.user.first_name, job.title, note, has_resume,
                                 employer_user.email, employer_name),
            notify_recipient=False,
        )
        notify(
            db, talent.user_id, NotificationType.recruitment,
            title="New Recruitment Invitation",
            message=f"{employer_name} has invited you to apply for: {job.title}",
            link="/dashboard/seeker/messages",
        )
        db.flush()

        logger.info(f"Employer {employer['employer_profile_id']} recruited talent {talent.id} for job {job.id}")
        return {
            "success": True,
            "message": "Recruitment invitation sent",
            "hasResume": has_resume,
            "threadId": thread.id,
            "application": serializers.application_summary(application) if application else None,
        }


# ============================================================
# STATS
# ============================================================

@router.get("/stats")
async def employer_stats(employer: dict = Depends(get_current_employer)):
    """Counters for the employer dashboard."""
    with get_db_session() as db:
        profile = db.get(EmployerProfile, employer["employer_profile_id"])
        jobs = profile.jobs
        applications = [a for job in jobs for a in job.applications]
        active_contracts = (
            db.query(Contract)
            .filter(Contract.employer_id == profile.id, Contract.status == ContractStatus.active.value)
            .all()
        )
        milestones = [m for c in active_contracts for m in c.milestones]
        pending_milestone_states = (MilestoneStatus.proposed.value, MilestoneStatus.in_progress.value)

        def count_status(status: ApplicationStatus) -> int:
            return sum(1 for a in applications if a.status == status.value)

        return {
            "stats": {
                "jobs": {
                    "total": len(jobs),
                    "active": sum(1 for j in jobs if j.status == JobStatus.open.value),
                    "closed": sum(1 for j in jobs if j.status == JobStatus.closed.value),
                },
                "applications": {
                    "total": len(applications),
                    "pending": count_status(ApplicationStatus.applied),
                    "shortlisted": count_status(ApplicationStatus.shortlisted),
                    "hired": count_status(ApplicationStatus.hired),
                    "rejected": count_status(ApplicationStatus.rejected),
                },
                "contracts": {
                    "active": len(active_contracts),
                    "totalMilestones": len(milestones),
                    "pendingMilestones": sum(1 for m in milestones if m.status in pending_milestone_states),
                },
            },
            "employerProfile": {
                "orgName": profile.org_name,
                "orgType": profile.org_type,
                "website": profile.website,
                "verified": profile.verified,
                "companyLogo": profile.company_logo,
            },
        }

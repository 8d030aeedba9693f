"""
Job Routes

GET /jobs/available - List open jobs with filters (public)
GET /jobs/recommended - Skill-matched jobs for the current seeker
GET /jobs/{job_id} - Get job details (public)
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy import or_
from typing import Optional

from skillshub.db.database import get_db_session
from skillshub.core.auth import get_current_seeker
from skillshub.models import Job, SkillOnJob, SkillOnProfile
from skillshub.models.enums import JobStatus
from skillshub.services import serializers
from skillshub.services.matching_service import job_match_score, rank_by_score
from skillshub.utils.helpers import contains_pattern

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def filter_jobs(query, search: Optional[str], type: Optional[str], location: Optional[str]):
    """Apply the shared job-board filters; unknown types simply match nothing."""
    if search and search.strip():
        pattern = contains_pattern(search)
        query = query.filter(or_(
            Job.title.ilike(pattern, escape="\\"),
            Job.description.ilike(pattern, escape="\\"),
        ))
    if type and type.lower() != "all":
        query = query.filter(Job.type == type)
    if location and location.strip():
        query = query.filter(Job.location.ilike(contains_pattern(location), escape="\\"))
    return query


@router.get("/available")
async def list_available_jobs(
    search: Optional[str] = Query(None, description="Search in title and description"),
    type: Optional[str] = Query(None, description="GIG, INTERNSHIP, PART_TIME, FULL_TIME or 'all'"),
    location: Optional[str] = Query(None)
):
    """List all open jobs, newest first."""
    with get_db_session() as db:
        query = filter_jobs(db.query(Job).filter(Job.status == JobStatus.open.value), search, type, location)
        jobs = query.order_by(Job.created_at.desc(), Job.id.desc()).all()
        return {"jobs": [serializers.job_summary(job) for job in jobs]}


@router.get("/recommended")
async def recommended_jobs(
    search: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    seeker: dict = Depends(get_current_seeker)
):
    """
    Open jobs ranked by skill overlap with the seeker's profile.

    When the seeker has skills, only jobs sharing at least one are returned.
    Accepts the same filters as /jobs/available.
    """
    with get_db_session() as db:
        user_skills = (
            db.query(SkillOnProfile)
            .filter(SkillOnProfile.profile_id == seeker["seeker_profile_id"])
            .all()
        )
        seeker_skill_ids = [sp.skill_id for sp in user_skills]

        query = db.query(Job).filter(Job.status == JobStatus.open.value)
        if seeker_skill_ids:
            query = query.filter(Job.skills.any(SkillOnJob.skill_id.in_(seeker_skill_ids)))
        query = filter_jobs(query, search, type, location)

        results = []
        for job in query.all():
            data = serializers.job_summary(job)
            job_skill_ids = [sj.skill_id for sj in job.skills]
            data["matchScore"] = job_match_score(seeker_skill_ids, job_skill_ids)
            data["matchingSkills"] = len(set(seeker_skill_ids) & set(job_skill_ids))
            results.append(data)

        return {
            "jobs": rank_by_score(results),
            "userSkills": [serializers.skill_dict(sp.skill) for sp in user_skills],
        }


@router.get("/{job_id}")
async def get_job(job_id: int):
    """Get details of a specific job, including employer contact."""
    with get_db_session() as db:
        job = db.get(Job, job_id)
        if not job:
            raise HTTPException(status_code=404, detail="Job not found")
        return {"job": serializers.job_detail(job)}

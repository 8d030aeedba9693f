"""
Talent Routes (employers and admins)

GET /talents - Browse verified talent, ranked by overlap with the employer's open-job skills
GET /talents/{profile_id} - Full talent profile including address
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Optional

from skillshub.db.database import get_db_session
from skillshub.core.auth import require_roles
from skillshub.models import EmployerProfile, Job, SeekerProfile, SkillOnJob, SkillOnProfile, User
from skillshub.models.enums import JobStatus, Pathway, UserRole
from skillshub.services import serializers
from skillshub.services.matching_service import talent_match_score, matching_skill_ids, rank_by_score
from skillshub.api.routes.freelancer_routes import verified_seekers, search_filter
from skillshub.schemas.schemas import Pagination

router = APIRouter(prefix="/talents", tags=["Talents"])

employer_or_admin = require_roles(UserRole.employer, UserRole.admin)


def employer_skill_ids(db, user_id: int) -> set:
    """Union of skills across the employer's OPEN jobs."""
    rows = (
        db.query(SkillOnJob.skill_id)
        .join(Job, SkillOnJob.job_id == Job.id)
        .join(EmployerProfile, Job.employer_id == EmployerProfile.id)
        .filter(EmployerProfile.user_id == user_id, Job.status == JobStatus.open.value)
        .distinct()
        .all()
    )
    return {r[0] for r in rows}


def _talent_card(profile: SeekerProfile, wanted: set) -> dict:
    skill_ids = [sp.skill_id for sp in profile.skills]
    portfolio = sorted(profile.portfolio, key=lambda p: p.id, reverse=True)
    return {
        "id": profile.id,
        "userId": profile.user_id,
        "name": profile.user.full_name,
        "firstName": profile.user.first_name,
        "lastName": profile.user.last_name,
        "email": profile.user.email,
        "phone": profile.user.phone,
        "profilePhotoFileId": profile.user.profile_photo_file_id,
        "pathway": profile.pathway,
        "profession": profile.profession,
        "headline": profile.headline,
        "bio": profile.bio,
        "yearsExperience": profile.years_experience,
        "availability": profile.availability,
        "skills": [
            {"id": sp.skill.id, "name": sp.skill.name, "level": sp.level}
            for sp in profile.skills[:10]
        ],
        "matchScore": talent_match_score(skill_ids, wanted),
        "matchingSkillsCount": len(matching_skill_ids(skill_ids, wanted)),
        "portfolioCount": len(profile.portfolio),
        "experienceCount": len(profile.experiences),
        "educationCount": len(profile.education),
        "trainingCount": len(profile.trainings),
        "portfolioItems": [
            {"id": p.id, "title": p.title, "description": p.description, "linkUrl": p.link_url, "fileId": p.file_id}
            for p in portfolio[:3]
        ],
        "createdAt": profile.user.created_at,
    }


@router.get("")
async def browse_talents(
    search: Optional[str] = Query(None),
    pathway: Optional[str] = Query(None),
    skill_id: Optional[int] = Query(None, alias="skillId"),
    min_experience: Optional[int] = Query(None, alias="minExperience", ge=0),
    use_matching: bool = Query(True, alias="useMatching"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user: dict = Depends(employer_or_admin)
):
    """
    Browse talent.

    With matching on and an employer who has open jobs with skills, only
    talent sharing at least one of those skills is listed (plus skillId,
    if given), ranked by match score then newest.
    """
    with get_db_session() as db:
        wanted = set()
        if use_matching and user["role"] == UserRole.employer.value:
            wanted = employer_skill_ids(db, user["user_id"])

        query = verified_seekers(db)
        if search:
            query = query.filter(search_filter(search, include_email=True))
        if pathway and pathway in {p.value for p in Pathway}:
            query = query.filter(SeekerProfile.pathway == pathway)

        if wanted:
            skill_pool = wanted | ({skill_id} if skill_id is not None else set())
            query = query.filter(SeekerProfile.skills.any(SkillOnProfile.skill_id.in_(skill_pool)))
        elif skill_id is not None:
            query = query.filter(SeekerProfile.skills.any(SkillOnProfile.skill_id == skill_id))

        if min_experience is not None:
            query = query.filter(SeekerProfile.years_experience >= min_experience)

        total = query.count()
        profiles = query.order_by(User.created_at.desc(), SeekerProfile.id.desc()).offset(offset).limit(limit).all()
        talents = rank_by_score([_talent_card(p, wanted) for p in profiles])

        return {
            "talents": talents,
            "pagination": Pagination(
                total=total, limit=limit, offset=offset, has_more=offset + limit < total
            ).model_dump(by_alias=True),
        }


@router.get("/{profile_id}")
async def get_talent(profile_id: int, user: dict = Depends(employer_or_admin)):
    """Full talent details for employers."""
    with get_db_session() as db:
        profile = db.get(SeekerProfile, profile_id)
        if not profile:
            raise HTTPException(status_code=404, detail="Talent not found")

        data = serializers.seeker_profile(profile, portfolio_limit=None)
        data.update({
            "name": profile.user.full_name,
            "firstName": profile.user.first_name,
            "lastName": profile.user.last_name,
            "email": profile.user.email,
            "phone": profile.user.phone,
            "gender": profile.user.gender,
            "profilePhotoFileId": profile.user.profile_photo_file_id,
            "address": serializers.address(profile.user),
            "createdAt": profile.user.created_at,
        })
        return {"talent": data}

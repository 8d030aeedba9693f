"""
Freelancer Routes (public)

GET /freelancers/top - Top 3 verified freelancers by experience
GET /freelancers/available - Browse verified freelancers with filters
GET /freelancers/{profile_id} - Public freelancer profile
"""

from fastapi import APIRouter, HTTPException, Query
from sqlalchemy import or_
from typing import Optional

from skillshub.db.database import get_db_session
from skillshub.models import SeekerProfile, User
from skillshub.models.enums import Pathway, UserRole
from skillshub.services import serializers
from skillshub.utils.helpers import contains_pattern

router = APIRouter(prefix="/freelancers", tags=["Freelancers"])


def verified_seekers(db):
    """Seeker profiles whose account is a verified JOB_SEEKER."""
    return (
        db.query(SeekerProfile)
        .join(User, SeekerProfile.user_id == User.id)
        .filter(User.role == UserRole.job_seeker.value, User.is_email_verified.is_(True))
    )


def search_filter(search: str, include_email: bool = False):
    pattern = contains_pattern(search)
    columns = [SeekerProfile.profession, SeekerProfile.headline, SeekerProfile.bio, User.first_name, User.last_name]
    if include_email:
        columns.append(User.email)
    clauses = [column.ilike(pattern, escape="\\") for column in columns]
    return or_(*clauses)


def _card(profile: SeekerProfile, skill_limit: int) -> dict:
    return {
        "id": profile.id,
        "userId": profile.user_id,
        "name": profile.user.full_name,
        "profession": profile.profession or "Professional",
        "headline": profile.headline or "",
        "bio": profile.bio or "",
        "yearsExperience": profile.years_experience or 0,
        "pathway": profile.pathway,
        "availability": profile.availability,
        "skills": [
            {"name": sp.skill.name, "slug": sp.skill.slug, "level": sp.level or 1}
            for sp in profile.skills[:skill_limit]
        ],
    }


def _by_experience(query):
    # NULL experience sorts last on every backend
    return query.order_by(
        SeekerProfile.years_experience.is_(None),
        SeekerProfile.years_experience.desc(),
        SeekerProfile.id.asc()
    )


@router.get("/top")
async def top_freelancers():
    """Top 3 verified freelancers by years of experience."""
    with get_db_session() as db:
        profiles = _by_experience(verified_seekers(db)).limit(3).all()
        return {"freelancers": [_card(p, skill_limit=3) for p in profiles]}


@router.get("/available")
async def available_freelancers(
    search: Optional[str] = Query(None),
    pathway: Optional[str] = Query(None, description="STUDENT, GRADUATE, ARTISAN or 'all'"),
    min_experience: Optional[int] = Query(None, alias="minExperience", ge=0)
):
    """Browse verified freelancers, most experienced first."""
    with get_db_session() as db:
        query = verified_seekers(db)

        if pathway and pathway != "all" and pathway in {p.value for p in Pathway}:
            query = query.filter(SeekerProfile.pathway == pathway)
        if min_experience is not None:
            query = query.filter(SeekerProfile.years_experience >= min_experience)
        if search:
            query = query.filter(search_filter(search))

        profiles = _by_experience(query).all()
        return {"freelancers": [_card(p, skill_limit=5) for p in profiles]}


@router.get("/{profile_id}")
async def get_freelancer(profile_id: int):
    """Public profile with skills, portfolio, education, trainings and experience."""
    with get_db_session() as db:
        profile = verified_seekers(db).filter(SeekerProfile.id == profile_id).first()
        if not profile:
            raise HTTPException(status_code=404, detail="Freelancer not found")

        data = serializers.seeker_profile(profile, portfolio_limit=None)
        data.update({
            "name": profile.user.full_name,
            "firstName": profile.user.first_name,
            "lastName": profile.user.last_name,
            "profilePhotoFileId": profile.user.profile_photo_file_id,
            "memberSince": profile.user.created_at,
        })
        return {"freelancer": data}

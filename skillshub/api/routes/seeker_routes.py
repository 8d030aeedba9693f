"""
Seeker Routes

GET /seeker/applications - My applications (optional status filter)
GET /seeker/skills - My skills
POST /seeker/skills - Add (or re-level) a skill
DELETE /seeker/skills/{skill_id} - Remove a skill
GET /seeker/portfolio - My portfolio items
POST /seeker/portfolio - Add portfolio item
GET /seeker/portfolio/{item_id} - Get portfolio item
PATCH /seeker/portfolio/{item_id} - Update portfolio item
DELETE /seeker/portfolio/{item_id} - Delete portfolio item
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Optional

from skillshub.db.database import get_db_session
from skillshub.core.auth import get_current_seeker
from skillshub.models import Application, FileObject, PortfolioItem, Skill, SkillOnProfile
from skillshub.models.enums import ApplicationStatus
from skillshub.services import serializers
from skillshub.services.file_service import discard_file
from skillshub.utils.helpers import safe_trim
from skillshub.schemas.schemas import SeekerSkillAdd, PortfolioCreate, PortfolioUpdate, MessageResponse

router = APIRouter(prefix="/seeker", tags=["Seeker"])


# ============================================================
# APPLICATIONS
# ============================================================

@router.get("/applications")
async def my_applications(
    status: Optional[ApplicationStatus] = Query(None),
    seeker: dict = Depends(get_current_seeker)
):
    """All job applications for the current seeker, newest first."""
    with get_db_session() as db:
        query = db.query(Application).filter(Application.seeker_id == seeker["seeker_profile_id"])
        if status:
            query = query.filter(Application.status == status.value)
        applications = query.order_by(Application.created_at.desc(), Application.id.desc()).all()
        return {"applications": [serializers.application_for_seeker(a) for a in applications]}


# ============================================================
# SKILLS
# ============================================================

@router.get("/skills")
async def my_skills(seeker: dict = Depends(get_current_seeker)):
    with get_db_session() as db:
        rows = (
            db.query(SkillOnProfile)
            .join(Skill, SkillOnProfile.skill_id == Skill.id)
            .filter(SkillOnProfile.profile_id == seeker["seeker_profile_id"])
            .order_by(Skill.name)
            .all()
        )
        return {"skills": [{**serializers.skill_dict(r.skill), "level": r.level} for r in rows]}


@router.post("/skills", response_model=MessageResponse, status_code=201)
async def add_skill(data: SeekerSkillAdd, seeker: dict = Depends(get_current_seeker)):
    """Add a catalogue skill to the profile; re-adding updates the level."""
    with get_db_session() as db:
        skill = db.get(Skill, data.skill_id)
        if not skill:
            raise HTTPException(status_code=404, detail="Skill not found")

        link = (
            db.query(SkillOnProfile)
            .filter(SkillOnProfile.profile_id == seeker["seeker_profile_id"], SkillOnProfile.skill_id == skill.id)
            .first()
        )
        if link:
            link.level = data.level
        else:
            db.add(SkillOnProfile(profile_id=seeker["seeker_profile_id"], skill_id=skill.id, level=data.level))
        name = skill.name

    return MessageResponse(message=f"Skill '{name}' added")


@router.delete("/skills/{skill_id}", response_model=MessageResponse)
async def remove_skill(skill_id: int, seeker: dict = Depends(get_current_seeker)):
    with get_db_session() as db:
        deleted = (
            db.query(SkillOnProfile)
            .filter(SkillOnProfile.profile_id == seeker["seeker_profile_id"], SkillOnProfile.skill_id == skill_id)
            .delete()
        )
        if deleted == 0:
            raise HTTPException(status_code=404, detail="Skill not found in profile")

    return MessageResponse(message="Skill removed")


# ============================================================
# PORTFOLIO
# ============================================================

def _check_file(db, file_id: Optional[str]) -> None:
    if file_id and not db.get(FileObject, file_id):
        raise HTTPException(status_code=404, detail="File not found")


def _get_own_item(db, item_id: int, profile_id: int) -> PortfolioItem:
    item = db.get(PortfolioItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Portfolio item not found")
    if item.profile_id != profile_id:
        raise HTTPException(status_code=403, detail="Forbidden")
    return item


@router.get("/portfolio")
async def list_portfolio(seeker: dict = Depends(get_current_seeker)):
    with get_db_session() as db:
        items = (
            db.query(PortfolioItem)
            .filter(PortfolioItem.profile_id == seeker["seeker_profile_id"])
            .order_by(PortfolioItem.id.desc())
            .all()
        )
        return {"portfolio": [serializers.portfolio_item(i) for i in items]}


@router.post("/portfolio", status_code=201)
async def create_portfolio_item(data: PortfolioCreate, seeker: dict = Depends(get_current_seeker)):
    title = safe_trim(data.title)
    if not title:
        raise HTTPException(status_code=400, detail="Title is required")

    with get_db_session() as db:
        _check_file(db, data.file_id)
        item = PortfolioItem(
            profile_id=seeker["seeker_profile_id"],
            title=title,
            description=safe_trim(data.description),
            link_url=safe_trim(data.link_url),
            file_id=data.file_id or None,
        )
        db.add(item)
        db.flush()
        return {"success": True, "item": serializers.portfolio_item(item)}


@router.get("/portfolio/{item_id}")
async def get_portfolio_item(item_id: int, seeker: dict = Depends(get_current_seeker)):
    with get_db_session() as db:
        item = _get_own_item(db, item_id, seeker["seeker_profile_id"])
        return {"item": serializers.portfolio_item(item)}


@router.patch("/portfolio/{item_id}")
async def update_portfolio_item(item_id: int, data: PortfolioUpdate, seeker: dict = Depends(get_current_seeker)):
    sent = data.model_fields_set
    with get_db_session() as db:
        item = _get_own_item(db, item_id, seeker["seeker_profile_id"])
        if "title" in sent:
            title = safe_trim(data.title)
            if not title:
                raise HTTPException(status_code=400, detail="Title cannot be empty")
            item.title = title
        if "description" in sent:
            item.description = safe_trim(data.description)
        if "link_url" in sent:
            item.link_url = safe_trim(data.link_url)
        if "file_id" in sent:
            _check_file(db, data.file_id)
            previous = item.file_id
            item.file_id = data.file_id or None
            if previous != item.file_id:
                discard_file(db, previous, seeker["user_id"])
        db.flush()
        return {"success": True, "item": serializers.portfolio_item(item)}


@router.delete("/portfolio/{item_id}", response_model=MessageResponse)
async def delete_portfolio_item(item_id: int, seeker: dict = Depends(get_current_seeker)):
    with get_db_session() as db:
        item = _get_own_item(db, item_id, seeker["seeker_profile_id"])
        file_id = item.file_id
        db.delete(item)
        discard_file(db, file_id, seeker["user_id"])

    return MessageResponse(message="Portfolio item deleted")

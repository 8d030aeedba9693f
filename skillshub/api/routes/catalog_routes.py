"""
Catalog Routes (public reference data)

GET /skills - Skill catalogue
GET /locations/regions - Sierra Leone regions with their districts
"""

from fastapi import APIRouter
from sqlalchemy.orm import selectinload

from skillshub.db.database import get_db_session
from skillshub.models import RegionSL, Skill
from skillshub.services import serializers

router = APIRouter(tags=["Catalog"])


@router.get("/skills")
async def list_skills():
    with get_db_session() as db:
        skills = db.query(Skill).order_by(Skill.name).all()
        return {"skills": [serializers.skill_dict(s) for s in skills]}


@router.get("/locations/regions")
async def list_regions():
    """Regions sorted by name, each with districts sorted by name."""
    with get_db_session() as db:
        regions = db.query(RegionSL).options(selectinload(RegionSL.districts)).order_by(RegionSL.name).all()
        return {
            "regions": [
                {
                    "id": r.id,
                    "name": r.name,
                    "districts": [{"id": d.id, "name": d.name} for d in r.districts],
                }
                for r in regions
            ]
        }

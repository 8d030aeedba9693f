"""
Profile Routes

GET /profile/seeker - Get own seeker profile (skills, education, portfolio, resume)
PATCH /profile/seeker - Update (or create) seeker profile
GET /profile/employer - Get own employer profile
PATCH /profile/employer - Update (or create) employer profile
PATCH /profile/update - Update basic account info (name, phone, gender)
"""

from fastapi import APIRouter, HTTPException, Depends

from skillshub.db.database import get_db_session
from skillshub.core.auth import get_current_user
from skillshub.models import User, SeekerProfile, EmployerProfile, FileObject
from skillshub.models.enums import UserRole
from skillshub.services import serializers
from skillshub.utils.helpers import parse_date, safe_trim
from skillshub.schemas.schemas import SeekerProfileUpdate, EmployerProfileUpdate, UserUpdate

router = APIRouter(prefix="/profile", tags=["Profile"])


def _require_role(user: dict, role: UserRole) -> None:
    if user["role"] != role.value:
        raise HTTPException(status_code=403, detail="Forbidden")


@router.get("/seeker")
async def get_seeker_profile(user: dict = Depends(get_current_user)):
    _require_role(user, UserRole.job_seeker)

    with get_db_session() as db:
        row = db.get(User, user["user_id"])
        if not row.seeker_profile:
            raise HTTPException(status_code=404, detail="Seeker profile not found")
        return {
            "user": serializers.user_public(row),
            "profile": serializers.seeker_profile(row.seeker_profile),
        }


@router.patch("/seeker")
async def update_seeker_profile(data: SeekerProfileUpdate, user: dict = Depends(get_current_user)):
    """
    Update only the fields sent. Creates the profile when missing
    (pathway is then required).
    """
    _require_role(user, UserRole.job_seeker)
    sent = data.model_fields_set

    with get_db_session() as db:
        changes = {}
        for field in ("profession", "headline", "bio", "availability", "years_experience"):
            if field in sent:
                changes[field] = getattr(data, field)
        if "pathway" in sent and data.pathway is not None:
            changes["pathway"] = data.pathway.value
        if "date_of_birth" in sent:
            changes["date_of_birth"] = parse_date(data.date_of_birth)
        if "resume_file_id" in sent:
            if data.resume_file_id and not db.get(FileObject, data.resume_file_id):
                raise HTTPException(status_code=404, detail="Resume file not found")
            changes["resume_file_id"] = data.resume_file_id or None

        profile = db.query(SeekerProfile).filter(SeekerProfile.user_id == user["user_id"]).first()
        if not profile:
            if "pathway" not in changes:
                raise HTTPException(status_code=400, detail="Pathway is required for new profiles")
            profile = SeekerProfile(user_id=user["user_id"], **changes)
            db.add(profile)
        else:
            for field, value in changes.items():
                setattr(profile, field, value)
        db.flush()

        return {
            "success": True,
            "profile": serializers.seeker_profile(profile),
            "message": "Profile updated successfully",
        }


@router.get("/employer")
async def get_employer_profile(user: dict = Depends(get_current_user)):
    """Profile is null until the employer creates one."""
    _require_role(user, UserRole.employer)

    with get_db_session() as db:
        row = db.get(User, user["user_id"])
        return {
            "user": serializers.user_public(row),
            "profile": serializers.employer_profile(row.employer_profile),
        }


@router.patch("/employer")
async def update_employer_profile(data: EmployerProfileUpdate, user: dict = Depends(get_current_user)):
    _require_role(user, UserRole.employer)
    changes = {field: getattr(data, field) for field in data.model_fields_set}
    if "org_name" in changes:
        changes["org_name"] = safe_trim(changes["org_name"])

    with get_db_session() as db:
        profile = db.query(EmployerProfile).filter(EmployerProfile.user_id == user["user_id"]).first()
        if not profile:
            if not changes.get("org_name"):
                raise HTTPException(status_code=400, detail="Organization name is required for new profiles")
            profile = EmployerProfile(user_id=user["user_id"], **changes)
            db.add(profile)
        else:
            if "org_name" in changes and not changes["org_name"]:
                raise HTTPException(status_code=400, detail="Organization name cannot be empty")
            for field, value in changes.items():
                setattr(profile, field, value)
        db.flush()

        return {
            "success": True,
            "profile": serializers.employer_profile(profile),
            "message": "Profile updated successfully",
        }


@router.patch("/update")
async def update_account(data: UserUpdate, user: dict = Depends(get_current_user)):
    """Update name, phone and gender. Gender may be cleared with null."""
    sent = data.model_fields_set
    names = {}
    for field, label in (("first_name", "First name"), ("last_name", "Last name")):
        if field in sent:
            names[field] = safe_trim(getattr(data, field))
            if not names[field]:
                raise HTTPException(status_code=400, detail=f"{label} cannot be empty")

    with get_db_session() as db:
        row = db.get(User, user["user_id"])
        for field, value in names.items():
            setattr(row, field, value)
        if "phone" in sent:
            row.phone = safe_trim(data.phone)
        if "gender" in sent:
            row.gender = data.gender.value if data.gender else None
        db.flush()

        return {
            "success": True,
            "user": serializers.user_public(row),
            "message": "Profile updated successfully",
        }

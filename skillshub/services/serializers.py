"""
Response shaping for ORM objects.

Column values are emitted with camelCase keys (first_name -> firstName),
matching the JSON the frontend consumes. Call these inside an open
session block so relationships can lazy-load.
"""

from typing import Iterable, List, Optional

from pydantic.alias_generators import to_camel

from skillshub.models import (
    User, SeekerProfile, EmployerProfile, Job, Application, PortfolioItem, Skill
)
from skillshub.services.file_service import file_summary

USER_PUBLIC_FIELDS = ("id", "email", "username", "first_name", "last_name", "phone", "gender")


def columns(obj, exclude: Iterable[str] = ()) -> dict:
    """All mapped columns of obj as a camelCase dict."""
    skip = set(exclude)
    return {
        to_camel(col.name): getattr(obj, col.name)
        for col in obj.__table__.columns
        if col.name not in skip
    }


def user_public(user: User) -> dict:
    return {to_camel(f): getattr(user, f) for f in USER_PUBLIC_FIELDS}


def skill_dict(skill: Skill) -> dict:
    return {"id": skill.id, "name": skill.name, "slug": skill.slug}


# ============================================================
# JOBS
# ============================================================

def job_skills(job: Job) -> List[dict]:
    return [
        {"id": sj.skill.id, "name": sj.skill.name, "slug": sj.skill.slug, "required": sj.required}
        for sj in job.skills
    ]


def employer_summary(employer: EmployerProfile) -> dict:
    return {
        "id": employer.id,
        "name": employer.org_name,
        "verified": employer.verified,
        "companyLogo": employer.company_logo,
    }


def job_summary(job: Job) -> dict:
    data = columns(job)
    data["employer"] = employer_summary(job.employer)
    data["skills"] = job_skills(job)
    return data


def job_detail(job: Job) -> dict:
    data = job_summary(job)
    owner = job.employer.user
    data["employer"].update({
        "orgType": job.employer.org_type,
        "website": job.employer.website,
        "contact": {
            "firstName": owner.first_name,
            "lastName": owner.last_name,
            "email": owner.email,
            "phone": owner.phone,
        },
    })
    return data


# ============================================================
# APPLICATIONS
# ============================================================

def application_summary(app: Application) -> dict:
    return {
        "id": app.id,
        "jobId": app.job_id,
        "seekerId": app.seeker_id,
        "status": app.status,
        "cvFileId": app.cv_file_id,
        "coverLetterFileId": app.cover_letter_file_id,
        "coverLetterText": app.cover_letter_text,
        "expectedPay": app.expected_pay,
        "createdAt": app.created_at,
        "updatedAt": app.updated_at,
    }


def applicant(profile: SeekerProfile, skill_limit: Optional[int] = 5) -> dict:
    skills = profile.skills if skill_limit is None else profile.skills[:skill_limit]
    return {
        "id": profile.id,
        "userId": profile.user_id,
        "name": profile.user.full_name,
        "firstName": profile.user.first_name,
        "lastName": profile.user.last_name,
        "email": profile.user.email,
        "phone": profile.user.phone,
        "pathway": profile.pathway,
        "profession": profile.profession,
        "headline": profile.headline,
        "yearsExperience": profile.years_experience,
        "resumeFileId": profile.resume_file_id,
        "skills": [{"id": sp.skill.id, "name": sp.skill.name, "level": sp.level} for sp in skills],
    }


def application_for_employer(app: Application) -> dict:
    data = application_summary(app)
    data["job"] = {"id": app.job.id, "title": app.job.title, "type": app.job.type, "status": app.job.status}
    data["applicant"] = applicant(app.seeker)
    data["cvFile"] = file_summary(app.cv_file)
    data["coverLetterFile"] = file_summary(app.cover_letter_file)
    return data


def application_for_seeker(app: Application) -> dict:
    data = application_summary(app)
    data["job"] = {
        "id": app.job.id,
        "title": app.job.title,
        "type": app.job.type,
        "status": app.job.status,
        "location": app.job.location,
        "salaryRange": app.job.salary_range,
        "employer": employer_summary(app.job.employer),
    }
    return data


# ============================================================
# PROFILES
# ============================================================

def portfolio_item(item: PortfolioItem) -> dict:
    data = columns(item)
    data["file"] = file_summary(item.file)
    return data


def profile_skills(profile: SeekerProfile) -> List[dict]:
    return [
        {"id": sp.skill.id, "name": sp.skill.name, "slug": sp.skill.slug, "level": sp.level}
        for sp in sorted(profile.skills, key=lambda sp: sp.skill.name)
    ]


def seeker_profile(profile: SeekerProfile, portfolio_limit: Optional[int] = 10) -> dict:
    """Full seeker profile with all related sections."""
    portfolio = sorted(profile.portfolio, key=lambda p: p.id, reverse=True)
    if portfolio_limit is not None:
        portfolio = portfolio[:portfolio_limit]

    data = columns(profile)
    data.update({
        "skills": profile_skills(profile),
        "education": [columns(e, exclude=("profile_id",)) for e in
                      sorted(profile.education, key=lambda e: e.start_year or 0, reverse=True)],
        "trainings": [columns(t, exclude=("profile_id",)) for t in profile.trainings],
        "experiences": [columns(x, exclude=("profile_id",)) for x in profile.experiences],
        "portfolio": [portfolio_item(p) for p in portfolio],
        "resumeFile": file_summary(profile.resume_file),
    })
    return data


def employer_profile(profile: Optional[EmployerProfile]) -> Optional[dict]:
    return columns(profile) if profile else None


def address(user: User) -> Optional[dict]:
    if not user.addresses:
        return None
    a = user.addresses[0]
    return {
        "addressLine1": a.address_line1,
        "addressLine2": a.address_line2,
        "city": a.city,
        "region": a.region.name if a.region else None,
        "district": a.district.name if a.district else None,
        "postalCode": a.postal_code,
    }

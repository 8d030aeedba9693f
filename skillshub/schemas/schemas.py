"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
JSON is camelCase on the wire; snake_case names are accepted too.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Union, Any
from datetime import datetime

from skillshub.models.enums import (
    UserRole, Gender, Pathway, JobType, JobStatus, ApplicationStatus, FileType
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ============================================================
# AUTH SCHEMAS
# ============================================================

class SignupBase(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6)
    phone: Optional[str] = None

    @field_validator("first_name", "last_name", "username")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class SeekerSignupRequest(SignupBase):
    pathway: Pathway


class EmployerSignupRequest(SignupBase):
    org_name: str = Field(..., min_length=1, max_length=200)
    org_type: Optional[str] = None
    website: Optional[str] = None

    @field_validator("org_name")
    @classmethod
    def strip_org_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class SignupResponse(CamelModel):
    success: bool = True
    message: str
    user_id: int


class VerifyOtpRequest(CamelModel):
    user_id: int
    otp: str = Field(..., min_length=1)


class VerifyOtpResponse(CamelModel):
    success: bool = True
    message: str
    redirect_url: str
    role: UserRole


class ResendOtpRequest(CamelModel):
    user_id: int


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    id: int
    email: str
    username: str
    first_name: str
    last_name: str
    role: UserRole


class LoginResponse(CamelModel):
    success: bool = True
    user: UserResponse
    redirect_url: str


class MeResponse(UserResponse):
    phone: Optional[str] = None
    gender: Optional[Gender] = None
    is_email_verified: bool
    profile_photo_file_id: Optional[str] = None
    created_at: datetime


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class SeekerProfileUpdate(CamelModel):
    pathway: Optional[Pathway] = None
    profession: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    date_of_birth: Optional[str] = None
    years_experience: Optional[int] = Field(None, ge=0, le=80)
    availability: Optional[str] = None
    resume_file_id: Optional[str] = None


class EmployerProfileUpdate(CamelModel):
    org_name: Optional[str] = None
    org_type: Optional[str] = None
    website: Optional[str] = None
    company_logo: Optional[str] = None


class UserUpdate(CamelModel):
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = None
    gender: Optional[Gender] = None


class SeekerSkillAdd(CamelModel):
    skill_id: int
    level: int = Field(1, ge=1, le=5)


class PortfolioCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    link_url: Optional[str] = None
    file_id: Optional[str] = None


class PortfolioUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    link_url: Optional[str] = None
    file_id: Optional[str] = None


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobSkillInput(CamelModel):
    skill_id: int
    required: bool = True


class JobWrite(CamelModel):
    """Create/replace payload. Type-specific fields are all optional."""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    type: JobType
    status: Optional[JobStatus] = None
    salary_range: Optional[str] = None
    location: Optional[str] = None

    # GIG
    project_duration: Optional[str] = None
    budget: Optional[Any] = None
    deadline: Optional[str] = None
    deliverables: Optional[str] = None

    # INTERNSHIP
    internship_duration: Optional[str] = None
    stipend: Optional[Any] = None
    start_date: Optional[str] = None
    learning_objectives: Optional[str] = None

    # PART_TIME
    hours_per_week: Optional[Any] = None
    schedule: Optional[str] = None
    hourly_rate: Optional[Any] = None

    # FULL_TIME
    work_arrangement: Optional[str] = None
    start_date_full_time: Optional[str] = None
    probation_period: Optional[str] = None
    benefits: Optional[str] = None

    skills: Optional[List[Union[int, JobSkillInput]]] = None

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    def skill_entries(self) -> List[JobSkillInput]:
        entries = []
        for s in self.skills or []:
            entries.append(JobSkillInput(skill_id=s) if isinstance(s, int) else s)
        return entries


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplyRequest(CamelModel):
    job_id: int
    cv_file_id: Optional[str] = None
    cover_letter_file_id: Optional[str] = None
    cover_letter_text: Optional[str] = None
    expected_pay: Optional[int] = Field(None, ge=0)

    @field_validator("cv_file_id", "cover_letter_file_id", "cover_letter_text", "expected_pay", mode="before")
    @classmethod
    def blank_as_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


class RecruitRequest(CamelModel):
    talent_id: int
    job_id: int
    message: Optional[str] = None


# ============================================================
# MESSAGING / NOTIFICATION SCHEMAS
# ============================================================

class StartThreadRequest(CamelModel):
    recipient_id: int
    message: str


class SendMessageRequest(CamelModel):
    message: str


class NotificationUpdate(CamelModel):
    notification_id: Optional[int] = None
    read: bool = True
    mark_all_as_read: bool = False


# ============================================================
# FILE SCHEMAS
# ============================================================

UPLOADABLE_FILE_TYPES = [
    FileType.cv, FileType.cover_letter, FileType.resume,
    FileType.portfolio, FileType.profile_photo, FileType.other,
]


class UploadResponse(CamelModel):
    success: bool = True
    file_id: str
    bucket_key: str
    size_bytes: int
    message: str


class ImageUploadResponse(CamelModel):
    success: bool = True
    file_id: str
    bucket_key: str
    url: str
    message: str


class FileUrlResponse(CamelModel):
    url: str
    bucket_key: str
    content_type: str


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class Pagination(CamelModel):
    total: int
    limit: int
    offset: int
    has_more: bool


class MessageResponse(CamelModel):
    message: str
    success: bool = True


class AvailabilityResponse(BaseModel):
    available: dict
    exists: bool

"""
Enumerations shared by ORM models and API schemas.

Stored as plain strings in the database.
"""

from enum import Enum


class UserRole(str, Enum):
    job_seeker = "JOB_SEEKER"
    employer = "EMPLOYER"
    admin = "ADMIN"


class Gender(str, Enum):
    male = "MALE"
    female = "FEMALE"
    other = "OTHER"


class Pathway(str, Enum):
    student = "STUDENT"
    graduate = "GRADUATE"
    artisan = "ARTISAN"


class JobType(str, Enum):
    gig = "GIG"
    internship = "INTERNSHIP"
    part_time = "PART_TIME"
    full_time = "FULL_TIME"


class JobStatus(str, Enum):
    open = "OPEN"
    closed = "CLOSED"


class ApplicationStatus(str, Enum):
    applied = "APPLIED"
    shortlisted = "SHORTLISTED"
    hired = "HIRED"
    rejected = "REJECTED"


class ContractStatus(str, Enum):
    active = "ACTIVE"
    completed = "COMPLETED"
    cancelled = "CANCELLED"


class MilestoneStatus(str, Enum):
    proposed = "PROPOSED"
    in_progress = "IN_PROGRESS"
    submitted = "SUBMITTED"
    approved = "APPROVED"
    paid = "PAID"


class NotificationType(str, Enum):
    application_received = "APPLICATION_RECEIVED"
    application_status = "APPLICATION_STATUS"
    recruitment = "RECRUITMENT"
    message = "MESSAGE"
    system = "SYSTEM"


class FileType(str, Enum):
    cv = "cv"
    cover_letter = "cover-letter"
    resume = "resume"
    portfolio = "portfolio"
    profile_photo = "profile-photo"
    company_logo = "company-logo"
    other = "other"

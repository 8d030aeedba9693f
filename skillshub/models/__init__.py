"""
Models module - SQLAlchemy ORM tables.

Importing this package registers every mapper on Base.
"""

from skillshub.models.user import User, UserSession, EmailVerificationToken
from skillshub.models.file import FileObject
from skillshub.models.profile import (
    SeekerProfile, EmployerProfile, Skill, SkillOnProfile,
    Education, Training, Experience, PortfolioItem
)
from skillshub.models.job import Job, SkillOnJob, Application, Contract, Milestone
from skillshub.models.messaging import DirectMessageThread, DirectMessage, Notification
from skillshub.models.location import RegionSL, DistrictSL, Address

__all__ = [
    "User", "UserSession", "EmailVerificationToken", "FileObject",
    "SeekerProfile", "EmployerProfile", "Skill", "SkillOnProfile",
    "Education", "Training", "Experience", "PortfolioItem",
    "Job", "SkillOnJob", "Application", "Contract", "Milestone",
    "DirectMessageThread", "DirectMessage", "Notification",
    "RegionSL", "DistrictSL", "Address",
]

# profile.py
from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from skillshub.db.database import Base
from skillshub.utils.helpers import utcnow


class SeekerProfile(Base):
    __tablename__ = "seeker_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    pathway = Column(String(20), nullable=False)
    profession = Column(String(200), nullable=True)
    headline = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    years_experience = Column(Integer, nullable=True)
    availability = Column(String(100), nullable=True)
    resume_file_id = Column(String(36), ForeignKey("file_objects.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="seeker_profile")
    resume_file = relationship("FileObject", foreign_keys=[resume_file_id])
    skills = relationship("SkillOnProfile", back_populates="profile", cascade="all, delete-orphan")
    education = relationship("Education", back_populates="profile", cascade="all, delete-orphan")
    trainings = relationship("Training", back_populates="profile", cascade="all, delete-orphan")
    experiences = relationship("Experience", back_populates="profile", cascade="all, delete-orphan")
    portfolio = relationship("PortfolioItem", back_populates="profile", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="seeker", cascade="all, delete-orphan")


class EmployerProfile(Base):
    __tablename__ = "employer_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    org_name = Column(String(200), nullable=False)
    org_type = Column(String(100), nullable=True)
    website = Column(String(255), nullable=True)
    company_logo = Column(String(255), nullable=True)
    verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="employer_profile")
    jobs = relationship("Job", back_populates="employer", cascade="all, delete-orphan")


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, index=True, nullable=False)


class SkillOnProfile(Base):
    __tablename__ = "skills_on_profiles"
    __table_args__ = (UniqueConstraint("profile_id", "skill_id", name="uq_profile_skill"),)

    id = Column(Integer, primary_key=True)
    profile_id = Column(Integer, ForeignKey("seeker_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True)
    level = Column(Integer, nullable=True, default=1)

    profile = relationship("SeekerProfile", back_populates="skills")
    skill = relationship("Skill")


class Education(Base):
    __tablename__ = "education"

    id = Column(Integer, primary_key=True)
    profile_id = Column(Integer, ForeignKey("seeker_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    school = Column(String(200), nullable=False)
    credential = Column(String(200), nullable=True)
    field = Column(String(200), nullable=True)
    start_year = Column(Integer, nullable=True)
    end_year = Column(Integer, nullable=True)

    profile = relationship("SeekerProfile", back_populates="education")


class Training(Base):
    __tablename__ = "trainings"

    id = Column(Integer, primary_key=True)
    profile_id = Column(Integer, ForeignKey("seeker_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    training_name = Column(String(200), nullable=False)
    institute = Column(String(200), nullable=True)
    certificate = Column(String(200), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    profile = relationship("SeekerProfile", back_populates="trainings")


class Experience(Base):
    __tablename__ = "experiences"

    id = Column(Integer, primary_key=True)
    profile_id = Column(Integer, ForeignKey("seeker_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    company_name = Column(String(200), nullable=False)
    role_title = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    description = Column(Text, nullable=True)

    profile = relationship("SeekerProfile", back_populates="experiences")


class PortfolioItem(Base):
    __tablename__ = "portfolio_items"

    id = Column(Integer, primary_key=True)
    profile_id = Column(Integer, ForeignKey("seeker_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    link_url = Column(String(500), nullable=True)
    file_id = Column(String(36), ForeignKey("file_objects.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    profile = relationship("SeekerProfile", back_populates="portfolio")
    file = relationship("FileObject")

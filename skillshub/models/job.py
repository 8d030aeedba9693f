# job.py
from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from skillshub.db.database import Base
from skillshub.models.enums import JobStatus, ApplicationStatus, ContractStatus, MilestoneStatus
from skillshub.utils.helpers import utcnow


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    employer_id = Column(Integer, ForeignKey("employer_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), index=True, nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default=JobStatus.open.value, index=True)
    salary_range = Column(String(100), nullable=True)
    location = Column(String(200), nullable=True)

    # GIG
    project_duration = Column(String(100), nullable=True)
    budget = Column(String(100), nullable=True)
    deadline = Column(Date, nullable=True)
    deliverables = Column(Text, nullable=True)

    # INTERNSHIP
    internship_duration = Column(String(100), nullable=True)
    stipend = Column(String(100), nullable=True)
    start_date = Column(Date, nullable=True)
    learning_objectives = Column(Text, nullable=True)

    # PART_TIME
    hours_per_week = Column(String(50), nullable=True)
    schedule = Column(String(200), nullable=True)
    hourly_rate = Column(String(100), nullable=True)

    # FULL_TIME
    work_arrangement = Column(String(100), nullable=True)
    start_date_full_time = Column(Date, nullable=True)
    probation_period = Column(String(100), nullable=True)
    benefits = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    employer = relationship("EmployerProfile", back_populates="jobs")
    skills = relationship("SkillOnJob", back_populates="job", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")
    contracts = relationship("Contract", back_populates="job", cascade="all, delete-orphan")


class SkillOnJob(Base):
    __tablename__ = "skills_on_jobs"
    __table_args__ = (UniqueConstraint("job_id", "skill_id", name="uq_job_skill"),)

    id = Column(Integer, primary_key=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True)
    required = Column(Boolean, nullable=False, default=True)

    job = relationship("Job", back_populates="skills")
    skill = relationship("Skill")


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("job_id", "seeker_id", name="uq_job_seeker_application"),)

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    seeker_id = Column(Integer, ForeignKey("seeker_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ApplicationStatus.applied.value, index=True)
    cv_file_id = Column(String(36), ForeignKey("file_objects.id", ondelete="SET NULL"), nullable=True)
    cover_letter_file_id = Column(String(36), ForeignKey("file_objects.id", ondelete="SET NULL"), nullable=True)
    cover_letter_text = Column(Text, nullable=True)
    expected_pay = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    job = relationship("Job", back_populates="applications")
    seeker = relationship("SeekerProfile", back_populates="applications")
    cv_file = relationship("FileObject", foreign_keys=[cv_file_id])
    cover_letter_file = relationship("FileObject", foreign_keys=[cover_letter_file_id])


class Contract(Base):
    __tablename__ = "contracts"

    id = Column(Integer, primary_key=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    seeker_id = Column(Integer, ForeignKey("seeker_profiles.id", ondelete="CASCADE"), nullable=False)
    employer_id = Column(Integer, ForeignKey("employer_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ContractStatus.active.value)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    job = relationship("Job", back_populates="contracts")
    seeker = relationship("SeekerProfile")
    milestones = relationship("Milestone", back_populates="contract", cascade="all, delete-orphan")


class Milestone(Base):
    __tablename__ = "milestones"

    id = Column(Integer, primary_key=True)
    contract_id = Column(Integer, ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    amount = Column(Float, nullable=True)
    status = Column(String(20), nullable=False, default=MilestoneStatus.proposed.value)

    contract = relationship("Contract", back_populates="milestones")

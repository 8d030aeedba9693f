"""
Seed data - reference catalogues plus demo accounts.

All functions are idempotent: rows are matched on their natural key
(name, slug, email) and only created when missing.
"""

import logging
from typing import Dict, List

from skillshub.core.auth import hash_password
from skillshub.models import (
    Address, Contract, DistrictSL, EmployerProfile, Job, Milestone, RegionSL,
    SeekerProfile, Skill, SkillOnJob, SkillOnProfile, User
)
from skillshub.models.enums import (
    ContractStatus, JobStatus, JobType, MilestoneStatus, Pathway, UserRole
)

logger = logging.getLogger(__name__)

REGIONS: Dict[str, List[str]] = {
    "Eastern": ["Kailahun", "Kenema", "Kono"],
    "Northern": ["Bombali", "Falaba", "Koinadugu", "Tonkolili"],
    "North West": ["Kambia", "Karene", "Port Loko"],
    "Southern": ["Bo", "Bonthe", "Moyamba", "Pujehun"],
    "Western Area": ["Western Area Rural", "Western Area Urban"],
}

SKILLS = [
    # Technical
    ("frontend-development", "Front-end Development"),
    ("backend-development", "Back-end Development"),
    ("fullstack-development", "Full-stack Development"),
    ("mobile-development", "Mobile Development"),
    ("ui-ux-design", "UI/UX Design"),
    ("graphic-design", "Graphic Design"),
    ("web-design", "Web Design"),
    ("data-entry", "Data Entry"),
    ("data-analysis", "Data Analysis"),
    ("database-management", "Database Management"),
    ("cloud-computing", "Cloud Computing"),
    ("cybersecurity", "Cybersecurity"),
    # Business & marketing
    ("digital-marketing", "Digital Marketing"),
    ("social-media-marketing", "Social Media Marketing"),
    ("content-writing", "Content Writing"),
    ("copywriting", "Copywriting"),
    ("seo", "SEO (Search Engine Optimization)"),
    ("business-development", "Business Development"),
    ("project-management", "Project Management"),
    ("customer-service", "Customer Service"),
    # Creative
    ("video-editing", "Video Editing"),
    ("photography", "Photography"),
    ("animation", "Animation"),
    ("illustration", "Illustration"),
    # Professional
    ("accounting", "Accounting"),
    ("bookkeeping", "Bookkeeping"),
    ("financial-analysis", "Financial Analysis"),
    ("human-resources", "Human Resources"),
    ("administration", "Administration"),
    # Artisan
    ("tailoring", "Tailoring"),
    ("welding", "Welding"),
    ("carpentry", "Carpentry"),
    ("electrical-work", "Electrical Work"),
    ("plumbing", "Plumbing"),
    ("masonry", "Masonry"),
    # Other
    ("translation", "Translation"),
    ("tutoring", "Tutoring"),
    ("event-planning", "Event Planning"),
    ("catering", "Catering"),
]

ADMIN = {"email": "admin@skillshub.sl", "username": "admin", "password": "Admin@123"}

EMPLOYERS = [
    {"email": "employer@skillshub.sl", "username": "employer1", "first_name": "Ada", "last_name": "Kanu",
     "org_name": "Salone Digital Co.", "org_type": "Startup", "website": "https://salonedigital.example",
     "verified": True},
    {"email": "hr@salonetech.sl", "username": "salonetech", "first_name": "Mohamed", "last_name": "Sesay",
     "org_name": "Salone Tech Solutions", "org_type": "Technology Company",
     "website": "https://salonetech.example", "verified": True},
    {"email": "info@greenleaf.sl", "username": "greenleaf", "first_name": "Fatmata", "last_name": "Turay",
     "org_name": "GreenLeaf NGO", "org_type": "NGO", "website": "https://greenleaf.example", "verified": False},
    {"email": "contact@westcoast.sl", "username": "westcoast", "first_name": "Ibrahim", "last_name": "Kamara",
     "org_name": "West Coast Trading", "org_type": "Business", "website": "https://westcoast.example",
     "verified": True},
]
EMPLOYER_PASSWORD = "Employer@123"

SEEKERS = [
    {"email": "seeker@skillshub.sl", "username": "seeker1", "first_name": "Mariama", "last_name": "Kamara",
     "pathway": Pathway.graduate, "profession": "Front-end Developer",
     "headline": "React + Tailwind junior developer", "years_experience": 1, "availability": "Weekdays",
     "skills": ["frontend-development", "ui-ux-design"], "city": "Freetown"},
    {"email": "ahmed@skillshub.sl", "username": "ahmedk", "first_name": "Ahmed", "last_name": "Koroma",
     "pathway": Pathway.student, "profession": "Web Developer",
     "headline": "Student developer building real-world projects", "years_experience": 0,
     "availability": "Evenings & Weekends", "skills": ["fullstack-development", "web-design"], "city": "Bo"},
    {"email": "isatu@skillshub.sl", "username": "isatu", "first_name": "Isatu", "last_name": "Conteh",
     "pathway": Pathway.artisan, "profession": "Tailor",
     "headline": "Experienced tailor specializing in traditional and modern designs", "years_experience": 8,
     "availability": "Flexible", "skills": ["tailoring"], "city": "Kenema"},
    {"email": "musa@skillshub.sl", "username": "musab", "first_name": "Musa", "last_name": "Bangura",
     "pathway": Pathway.graduate, "profession": "Digital Marketer",
     "headline": "Creative marketer with proven track record", "years_experience": 2, "availability": "Full-time",
     "skills": ["digital-marketing", "social-media-marketing", "content-writing"], "city": "Freetown"},
    {"email": "hawa@skillshub.sl", "username": "hawaj", "first_name": "Hawa", "last_name": "Jalloh",
     "pathway": Pathway.graduate, "profession": "Graphic Designer",
     "headline": "Creative designer bringing ideas to life", "years_experience": 3, "availability": "Full-time",
     "skills": ["graphic-design", "ui-ux-design", "illustration"], "city": "Freetown"},
    {"email": "alhaji@skillshub.sl", "username": "alhaji", "first_name": "Alhaji", "last_name": "Sankoh",
     "pathway": Pathway.artisan, "profession": "Welder", "headline": "Skilled welder and metal fabricator",
     "years_experience": 10, "availability": "Flexible", "skills": ["welding"], "city": "Makeni"},
]
SEEKER_PASSWORD = "Seeker@123"

# (employer index, title, type, location, salary range, skill slugs)
JOBS = [
    (0, "Junior Front-end Developer (React + Tailwind)", JobType.full_time, "Freetown / Hybrid",
     "3,000,000 - 5,000,000 SLL", ["frontend-development", "ui-ux-design"]),
    (1, "Full-stack Developer", JobType.full_time, "Freetown",
     "5,000,000 - 8,000,000 SLL", ["fullstack-development", "backend-development", "database-management"]),
    (0, "Graphic Designer - Part-time", JobType.part_time, "Remote",
     "1,500,000 - 2,500,000 SLL", ["graphic-design", "web-design"]),
    (2, "Social Media Manager", JobType.full_time, "Bo / Remote",
     "2,500,000 - 4,000,000 SLL", ["social-media-marketing", "content-writing", "digital-marketing"]),
    (3, "Web Developer Intern", JobType.internship, "Freetown",
     "500,000 - 1,000,000 SLL", ["web-design", "frontend-development"]),
    (1, "Custom Metal Gate Fabrication", JobType.gig, "Freetown", "Negotiable", ["welding"]),
    (0, "Data Entry Specialist", JobType.part_time, "Remote", "1,000,000 - 1,500,000 SLL", ["data-entry"]),
    (2, "Tailor for Custom Apparel", JobType.gig, "Kenema", "Negotiable", ["tailoring"]),
]


def seed_locations(db) -> int:
    created = 0
    for region_name, districts in REGIONS.items():
        region = db.query(RegionSL).filter(RegionSL.name == region_name).first()
        if not region:
            region = RegionSL(name=region_name)
            db.add(region)
            db.flush()
        existing = {d.name for d in region.districts}
        for district_name in districts:
            if district_name not in existing:
                db.add(DistrictSL(name=district_name, region_id=region.id))
                created += 1
    db.flush()
    return created


def seed_skills(db) -> int:
    created = 0
    for slug, name in SKILLS:
        skill = db.query(Skill).filter(Skill.slug == slug).first()
        if skill:
            skill.name = name
        else:
            db.add(Skill(slug=slug, name=name))
            created += 1
    db.flush()
    return created


def _get_or_create_user(db, email: str, username: str, password: str, first_name: str,
                        last_name: str, role: UserRole) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user:
        return user
    user = User(
        email=email, username=username, password=hash_password(password),
        first_name=first_name, last_name=last_name, role=role.value, is_email_verified=True,
    )
    db.add(user)
    db.flush()
    return user


def seed_demo_data(db) -> None:
    """Admin, sample employers, seekers, jobs and one active contract."""
    _get_or_create_user(db, ADMIN["email"], ADMIN["username"], ADMIN["password"],
                        "System", "Admin", UserRole.admin)

    skills = {s.slug: s for s in db.query(Skill).all()}
    western_area = db.query(RegionSL).filter(RegionSL.name == "Western Area").first()

    employers = []
    for emp in EMPLOYERS:
        user = _get_or_create_user(db, emp["email"], emp["username"], EMPLOYER_PASSWORD,
                                   emp["first_name"], emp["last_name"], UserRole.employer)
        if not user.employer_profile:
            db.add(EmployerProfile(user_id=user.id, org_name=emp["org_name"], org_type=emp["org_type"],
                                   website=emp["website"], verified=emp["verified"]))
            db.flush()
            db.refresh(user)
        employers.append(user.employer_profile)

    seekers = []
    for seek in SEEKERS:
        user = _get_or_create_user(db, seek["email"], seek["username"], SEEKER_PASSWORD,
                                   seek["first_name"], seek["last_name"], UserRole.job_seeker)
        if not user.seeker_profile:
            profile = SeekerProfile(
                user_id=user.id, pathway=seek["pathway"].value, profession=seek["profession"],
                headline=seek["headline"], years_experience=seek["years_experience"],
                availability=seek["availability"],
            )
            db.add(profile)
            db.flush()
            for slug in seek["skills"]:
                if slug in skills:
                    db.add(SkillOnProfile(profile_id=profile.id, skill_id=skills[slug].id, level=3))
            db.add(Address(user_id=user.id, city=seek["city"],
                           region_id=western_area.id if western_area and seek["city"] == "Freetown" else None))
            db.flush()
            db.refresh(user)
        seekers.append(user.seeker_profile)

    jobs = []
    for employer_index, title, job_type, location, salary, slugs in JOBS:
        employer = employers[employer_index]
        job = db.query(Job).filter(Job.employer_id == employer.id, Job.title == title).first()
        if not job:
            job = Job(employer_id=employer.id, title=title, description=f"{title} at {employer.org_name}.",
                      type=job_type.value, status=JobStatus.open.value, location=location, salary_range=salary)
            db.add(job)
            db.flush()
            for slug in slugs:
                if slug in skills:
                    db.add(SkillOnJob(job_id=job.id, skill_id=skills[slug].id, required=True))
        jobs.append(job)
    db.flush()

    # One running contract so employer dashboards have milestone data
    gig = jobs[5]
    if not gig.contracts:
        contract = Contract(job_id=gig.id, seeker_id=seekers[5].id, employer_id=gig.employer_id,
                            status=ContractStatus.active.value)
        db.add(contract)
        db.flush()
        db.add_all([
            Milestone(contract_id=contract.id, title="Onboarding & Project Setup", amount=500000,
                      status=MilestoneStatus.approved.value),
            Milestone(contract_id=contract.id, title="Gate Fabrication", amount=1500000,
                      status=MilestoneStatus.in_progress.value),
        ])
    db.flush()


def seed_all(db, demo: bool = True) -> None:
    districts = seed_locations(db)
    skills = seed_skills(db)
    logger.info(f"Seeded {districts} districts and {skills} skills")
    if demo:
        seed_demo_data(db)
        logger.info("Seeded demo accounts, jobs and contract")

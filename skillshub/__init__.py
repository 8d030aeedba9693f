"""
Salone SkillsHub
Job marketplace backend connecting job seekers and employers in Sierra Leone.

Architecture:
- PostgreSQL: Users, profiles, jobs, applications, messages
- S3-compatible object storage: CVs, resumes, photos, company logos
- Email OTP verification + session cookies for auth
"""

__version__ = "1.0.0"

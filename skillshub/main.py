"""
Salone SkillsHub - Main Application

FastAPI backend with:
- PostgreSQL (SQLAlchemy) for users, profiles, jobs, applications, messages
- S3-compatible object storage for CVs, resumes, photos and logos
- Email OTP verification and cookie sessions

Run: uvicorn skillshub.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillshub.api.routes import api_router
from skillshub.core.config import get_settings
from skillshub.core.errors import register_exception_handlers
from skillshub.db.database import init_db, test_database_connection

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Salone SkillsHub",
    description="""
    Job marketplace connecting job seekers and employers in Sierra Leone.

    ## Features
    - **Authentication**: Email OTP verification, cookie sessions
    - **Seekers**: Profiles, skills, portfolio, applications
    - **Employers**: Job postings, applicant management, talent recruitment
    - **Jobs**: Browse, search and skill-based recommendations
    - **Files**: CVs, resumes, photos and logos via object storage
    - **Messaging**: Direct messages and in-app notifications
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create tables on startup."""
    try:
        init_db()
        logger.info("Database tables initialized")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Salone SkillsHub", "docs": "/docs"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected" if test_database_connection() else "disconnected",
    }

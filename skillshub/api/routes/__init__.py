"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from skillshub.api.routes.auth_routes import router as auth_router
from skillshub.api.routes.file_routes import router as file_router
from skillshub.api.routes.profile_routes import router as profile_router
from skillshub.api.routes.seeker_routes import router as seeker_router
from skillshub.api.routes.job_routes import router as job_router
from skillshub.api.routes.application_routes import router as application_router
from skillshub.api.routes.employer_routes import router as employer_router
from skillshub.api.routes.freelancer_routes import router as freelancer_router
from skillshub.api.routes.talent_routes import router as talent_router
from skillshub.api.routes.message_routes import router as message_router
from skillshub.api.routes.notification_routes import router as notification_router
from skillshub.api.routes.catalog_routes import router as catalog_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(file_router)
api_router.include_router(profile_router)
api_router.include_router(seeker_router)
api_router.include_router(job_router)
api_router.include_router(application_router)
api_router.include_router(employer_router)
api_router.include_router(freelancer_router)
api_router.include_router(talent_router)
api_router.include_router(message_router)
api_router.include_router(notification_router)
api_router.include_router(catalog_router)

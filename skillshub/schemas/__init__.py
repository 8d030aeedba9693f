"""
Schemas module - Request/Response schemas for API endpoints.

All schemas live in skillshub.schemas.schemas.
"""

"""
Authentication Utility - Password hashing and cookie sessions.

Provides:
- Password hashing with bcrypt
- Session issuance: a random token persisted in user_sessions, wrapped
  in a signed JWT and set as the httpOnly "session" cookie
- FastAPI dependencies for protected routes
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Cookie, Depends, HTTPException, Response, status

from skillshub.core.config import get_settings
from skillshub.db.database import get_db_session
from skillshub.models import User, UserSession, SeekerProfile, EmployerProfile
from skillshub.models.enums import UserRole
from skillshub.utils.helpers import utcnow

settings = get_settings()
logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SESSION_COOKIE_NAME = "session"

REDIRECTS = {
    UserRole.job_seeker.value: "/dashboard/seeker",
    UserRole.employer.value: "/dashboard/employer",
    UserRole.admin.value: "/dashboard/admin",
}


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def redirect_url_for_role(role: str) -> str:
    return REDIRECTS.get(role, "/")


def create_session_token(session_token: str, user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Create the signed cookie value for a stored session."""
    expire = utcnow() + (expires_delta or timedelta(days=settings.session_max_age_days))
    to_encode = {"sub": str(user_id), "sid": session_token, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify the session JWT."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def start_session(db, user_id: int, response: Response) -> str:
    """
    Persist a new session for the user and set the cookie on the response.

    Must be called inside an open get_db_session() block.
    """
    max_age = timedelta(days=settings.session_max_age_days)
    token = secrets.token_urlsafe(32)
    db.add(UserSession(session_token=token, user_id=user_id, expires=utcnow() + max_age))

    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=create_session_token(token, user_id, max_age),
        max_age=int(max_age.total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )
    return token


def end_session(cookie_value: Optional[str], response: Response) -> None:
    """Delete the stored session (if any) and clear the cookie."""
    payload = decode_token(cookie_value) if cookie_value else None
    if payload and payload.get("sid"):
        with get_db_session() as db:
            db.query(UserSession).filter(UserSession.session_token == payload["sid"]).delete()
    response.delete_cookie(key=SESSION_COOKIE_NAME, path="/")


def _user_dict(user: User) -> dict:
    return {
        "user_id": user.id,
        "email": user.email,
        "username": user.username,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role,
        "is_email_verified": user.is_email_verified,
    }


async def get_current_user(session: Optional[str] = Cookie(None)) -> dict:
    """
    FastAPI dependency - Get current authenticated user from the session cookie.

    Usage:
        @router.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    unauthorized = HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    if not session:
        raise unauthorized

    payload = decode_token(session)
    if not payload or not payload.get("sid") or not payload.get("sub"):
        raise unauthorized

    with get_db_session() as db:
        stored = db.query(UserSession).filter(UserSession.session_token == payload["sid"]).first()
        if not stored or stored.expires < utcnow() or str(stored.user_id) != payload["sub"]:
            raise unauthorized
        user = db.get(User, stored.user_id)
        if not user:
            raise unauthorized
        return _user_dict(user)


async def get_current_seeker(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require job seeker role and get seeker_profile_id."""
    if user["role"] != UserRole.job_seeker.value:
        raise HTTPException(status_code=403, detail="Forbidden")

    with get_db_session() as db:
        profile = db.query(SeekerProfile).filter(SeekerProfile.user_id == user["user_id"]).first()

    if not profile:
        raise HTTPException(status_code=404, detail="Seeker profile not found")

    user["seeker_profile_id"] = profile.id
    return user


async def get_current_employer(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require employer role and get employer_profile_id."""
    if user["role"] != UserRole.employer.value:
        raise HTTPException(status_code=403, detail="Forbidden")

    with get_db_session() as db:
        profile = db.query(EmployerProfile).filter(EmployerProfile.user_id == user["user_id"]).first()

    if not profile:
        raise HTTPException(status_code=404, detail="Employer profile not found")

    user["employer_profile_id"] = profile.id
    return user


def require_roles(*roles: UserRole):
    """Dependency factory - allow any of the given roles."""
    allowed = {r.value for r in roles}

    async def dependency(user: dict = Depends(get_current_user)) -> dict:
        if user["role"] not in allowed:
            raise HTTPException(status_code=403, detail="Forbidden")
        return user

    return dependency

"""
Authentication Routes

POST /auth/signup/seeker - Register job seeker (sends email OTP)
POST /auth/signup/employer - Register employer (sends email OTP)
POST /auth/verify-otp - Verify email with OTP and start session
POST /auth/resend-otp - Issue a fresh OTP
POST /auth/login - Login with email + password (verified accounts only)
POST /auth/logout - End session
GET /auth/check-availability - Check if email/username are free
GET /auth/me - Get current user info
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Response, Cookie, Query
from sqlalchemy import or_

from skillshub.db.database import get_db_session
from skillshub.core.auth import (
    hash_password, verify_password, start_session, end_session,
    redirect_url_for_role, get_current_user
)
from skillshub.models import User, SeekerProfile, EmployerProfile
from skillshub.models.enums import UserRole
from skillshub.services import verification_service
from skillshub.utils.helpers import utcnow, safe_trim
from skillshub.schemas.schemas import (
    SeekerSignupRequest, EmployerSignupRequest, SignupResponse, VerifyOtpRequest,
    VerifyOtpResponse, ResendOtpRequest, LoginRequest, LoginResponse, UserResponse,
    MeResponse, MessageResponse, AvailabilityResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


def _create_user(db, data, role: UserRole) -> User:
    """Insert an unverified user; rejects duplicate email/username."""
    email = data.email.lower()
    existing = db.query(User).filter(or_(User.email == email, User.username == data.username)).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email or username already exists")

    user = User(
        email=email,
        username=data.username,
        password=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        phone=safe_trim(data.phone),
        role=role.value,
        is_email_verified=False,
    )
    db.add(user)
    db.flush()
    return user


def _send_verification(user: User, otp: str) -> str:
    if verification_service.send_otp(user, otp):
        return "Account created. Please check your email for the verification code."
    return "Account created, but we could not send the verification email. Please request a new code."


@router.post("/signup/seeker", response_model=SignupResponse, status_code=201)
async def signup_seeker(request: SeekerSignupRequest):
    """
    Register a job seeker account.

    The account stays unverified until the emailed OTP is confirmed.
    """
    with get_db_session() as db:
        user = _create_user(db, request, UserRole.job_seeker)
        db.add(SeekerProfile(user_id=user.id, pathway=request.pathway.value))
        otp = verification_service.issue_otp(db, user)

    logger.info(f"Seeker signup: user {user.id} ({user.email})")
    return SignupResponse(message=_send_verification(user, otp), user_id=user.id)


@router.post("/signup/employer", response_model=SignupResponse, status_code=201)
async def signup_employer(request: EmployerSignupRequest):
    """Register an employer account with its organisation profile."""
    with get_db_session() as db:
        user = _create_user(db, request, UserRole.employer)
        db.add(EmployerProfile(
            user_id=user.id,
            org_name=request.org_name.strip(),
            org_type=safe_trim(request.org_type),
            website=safe_trim(request.website),
        ))
        otp = verification_service.issue_otp(db, user)

    logger.info(f"Employer signup: user {user.id} ({user.email})")
    return SignupResponse(message=_send_verification(user, otp), user_id=user.id)


@router.post("/verify-otp", response_model=VerifyOtpResponse)
async def verify_otp(request: VerifyOtpRequest, response: Response):
    """Verify email with the 6-digit code, then log the user in."""
    with get_db_session() as db:
        user = verification_service.verify_otp(db, request.user_id, request.otp)
        start_session(db, user.id, response)
        role = user.role

    return VerifyOtpResponse(
        message="Email verified successfully",
        redirect_url=redirect_url_for_role(role),
        role=role
    )


@router.post("/resend-otp", response_model=MessageResponse)
async def resend_otp(request: ResendOtpRequest):
    """Replace pending codes with a new one and email it."""
    with get_db_session() as db:
        user = db.get(User, request.user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        if user.is_email_verified:
            raise HTTPException(status_code=400, detail="Email is already verified")
        otp = verification_service.issue_otp(db, user)

    if not verification_service.send_otp(user, otp):
        return MessageResponse(success=False, message="Could not send verification email. Please try again.")
    return MessageResponse(message="A new verification code has been sent to your email")


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, response: Response):
    """
    Login with email and password.

    Unverified accounts get 403 with needsVerification so the client can
    route to the OTP screen.
    """
    with get_db_session() as db:
        user = db.query(User).filter(User.email == request.email.strip().lower()).first()

        if not user or not verify_password(request.password, user.password):
            raise HTTPException(status_code=401, detail="Invalid email or password")

        if not user.is_email_verified:
            raise HTTPException(status_code=403, detail={
                "error": "Please verify your email before logging in",
                "needsVerification": True,
                "userId": user.id,
            })

        user.last_login_at = utcnow()
        start_session(db, user.id, response)

    logger.info(f"Login: user {user.id}")
    return LoginResponse(
        user=UserResponse.model_validate(user),
        redirect_url=redirect_url_for_role(user.role)
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, session: Optional[str] = Cookie(None)):
    """End the current session (no-op if not logged in)."""
    end_session(session, response)
    return MessageResponse(message="Logged out successfully")


@router.get("/check-availability", response_model=AvailabilityResponse)
async def check_availability(
    email: Optional[str] = Query(None),
    username: Optional[str] = Query(None)
):
    """Check whether an email and/or username is still free."""
    if not email and not username:
        raise HTTPException(status_code=400, detail="Email or username is required")

    available = {}
    with get_db_session() as db:
        if email:
            available["email"] = db.query(User.id).filter(User.email == email.strip().lower()).first() is None
        if username:
            available["username"] = db.query(User.id).filter(User.username == username.strip()).first() is None

    return AvailabilityResponse(available=available, exists=not all(available.values()))


@router.get("/me", response_model=MeResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    with get_db_session() as db:
        row = db.get(User, user["user_id"])
    return MeResponse.model_validate(row)

"""
Email Verification Service

Accounts start unverified. A 6-digit OTP is emailed on signup (and on
resend); only its sha256 hash is stored, valid for OTP_EXPIRE_MINUTES.
A correct code flips the account to verified and consumes every token.
"""

import hashlib
import hmac
import logging
import secrets
import uuid
from datetime import timedelta

from fastapi import HTTPException

from skillshub.core.config import get_settings
from skillshub.models import User, EmailVerificationToken
from skillshub.services.email_service import get_email_service
from skillshub.utils.helpers import utcnow

logger = logging.getLogger(__name__)


def generate_otp() -> str:
    """Random code in 100000-999999."""
    return str(100000 + secrets.randbelow(900000))


def hash_otp(otp: str) -> str:
    return hashlib.sha256(otp.encode("utf-8")).hexdigest()


def issue_otp(db, user: User) -> str:
    """
    Replace any pending codes for the user with a fresh one.

    Returns the plaintext code so it can be emailed.
    """
    settings = get_settings()
    otp = generate_otp()

    db.query(EmailVerificationToken).filter(EmailVerificationToken.user_id == user.id).delete()
    db.add(EmailVerificationToken(
        user_id=user.id,
        token=str(uuid.uuid4()),
        code_hash=hash_otp(otp),
        expires_at=utcnow() + timedelta(minutes=settings.otp_expire_minutes),
    ))
    return otp


def send_otp(user: User, otp: str) -> bool:
    """Email the code; failure is logged, never raised."""
    sent = get_email_service().send_otp_email(user.email, user.first_name, otp)
    if not sent:
        logger.warning(f"Failed to send verification email to {user.email}. OTP for user {user.id}: {otp}")
    return sent


def verify_otp(db, user_id: int, otp: str) -> User:
    """
    Check a submitted code against the latest unexpired token.

    Raises:
        HTTPException(400) for expired/missing tokens or a wrong code
        HTTPException(404) when the user does not exist
    """
    token = (
        db.query(EmailVerificationToken)
        .filter(
            EmailVerificationToken.user_id == user_id,
            EmailVerificationToken.expires_at > utcnow(),
        )
        .order_by(EmailVerificationToken.created_at.desc(), EmailVerificationToken.id.desc())
        .first()
    )
    if not token:
        raise HTTPException(status_code=400, detail="Invalid or expired OTP")

    if not hmac.compare_digest(token.code_hash, hash_otp(str(otp).strip())):
        raise HTTPException(status_code=400, detail="Invalid OTP code")

    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    user.is_email_verified = True
    db.query(EmailVerificationToken).filter(EmailVerificationToken.user_id == user_id).delete()
    return user

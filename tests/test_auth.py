"""
Tests for signup, OTP verification, login/logout and session handling.
"""

from datetime import timedelta

from fastapi.testclient import TestClient

from skillshub.main import app
from skillshub.db.database import get_db_session
from skillshub.models import EmailVerificationToken, User, UserSession
from skillshub.utils.helpers import utcnow
from conftest import FIXED_OTP, PASSWORD, signup_payload


def _signup(client, role="seeker", **overrides):
    payload = signup_payload(role, **overrides)
    response = client.post(f"/api/auth/signup/{role}", json=payload)
    assert response.status_code == 201, response.text
    return payload, response.json()["userId"]


class TestSignup:

    def test_seeker_signup_creates_unverified_account(self, anon_client):
        payload = signup_payload("seeker")
        response = anon_client.post("/api/auth/signup/seeker", json=payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert "check your email" in body["message"]

        with get_db_session() as db:
            user = db.get(User, body["userId"])
            assert user.role == "JOB_SEEKER"
            assert user.is_email_verified is False
            assert user.password != PASSWORD
            assert user.seeker_profile.pathway == "GRADUATE"
            assert db.query(EmailVerificationToken).filter_by(user_id=user.id).count() == 1

    def test_employer_signup_creates_org_profile(self, anon_client):
        payload = signup_payload("employer", orgName="  Salone Tech Solutions ", website="https://salonetech.example")
        response = anon_client.post("/api/auth/signup/employer", json=payload)

        assert response.status_code == 201
        with get_db_session() as db:
            user = db.get(User, response.json()["userId"])
            assert user.role == "EMPLOYER"
            assert user.employer_profile.org_name == "Salone Tech Solutions"
            assert user.employer_profile.website == "https://salonetech.example"
            assert user.employer_profile.verified is False

    def test_email_is_stored_lowercase(self, anon_client):
        payload = signup_payload("seeker", email="Mixed.Case@SkillsHub.sl")
        response = anon_client.post("/api/auth/signup/seeker", json=payload)

        with get_db_session() as db:
            assert db.get(User, response.json()["userId"]).email == "mixed.case@skillshub.sl"

    def test_duplicate_email_rejected(self, anon_client):
        payload, _ = _signup(anon_client)
        again = signup_payload("seeker", email=payload["email"])

        response = anon_client.post("/api/auth/signup/seeker", json=again)

        assert response.status_code == 400
        assert response.json() == {"error": "Email or username already exists"}

    def test_duplicate_username_rejected(self, anon_client):
        payload, _ = _signup(anon_client)
        again = signup_payload("seeker", username=payload["username"])

        response = anon_client.post("/api/auth/signup/seeker", json=again)

        assert response.status_code == 400

    def test_missing_fields(self, anon_client):
        response = anon_client.post("/api/auth/signup/seeker", json={"email": "x@skillshub.sl"})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    def test_empty_required_field_counts_as_missing(self, anon_client):
        payload = signup_payload("seeker", firstName="")

        response = anon_client.post("/api/auth/signup/seeker", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    def test_blank_org_name_rejected(self, anon_client):
        payload = signup_payload("employer", orgName="   ")

        response = anon_client.post("/api/auth/signup/employer", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}
        with get_db_session() as db:
            assert db.query(User).count() == 0

    def test_invalid_pathway(self, anon_client):
        payload = signup_payload("seeker", pathway="ASTRONAUT")

        response = anon_client.post("/api/auth/signup/seeker", json=payload)

        assert response.status_code == 400
        assert "error" in response.json()


class TestVerifyOtp:

    def test_correct_code_verifies_and_sets_cookie(self, anon_client):
        _, user_id = _signup(anon_client)

        response = anon_client.post("/api/auth/verify-otp", json={"userId": user_id, "otp": FIXED_OTP})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["redirectUrl"] == "/dashboard/seeker"
        assert body["role"] == "JOB_SEEKER"
        assert "session" in anon_client.cookies

        with get_db_session() as db:
            assert db.get(User, user_id).is_email_verified is True
            assert db.query(EmailVerificationToken).filter_by(user_id=user_id).count() == 0
            assert db.query(UserSession).filter_by(user_id=user_id).count() == 1

    def test_employer_redirect(self, anon_client):
        _, user_id = _signup(anon_client, role="employer")

        response = anon_client.post("/api/auth/verify-otp", json={"userId": user_id, "otp": FIXED_OTP})

        assert response.json()["redirectUrl"] == "/dashboard/employer"

    def test_wrong_code(self, anon_client):
        _, user_id = _signup(anon_client)

        response = anon_client.post("/api/auth/verify-otp", json={"userId": user_id, "otp": "000000"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid OTP code"}
        assert "session" not in anon_client.cookies

    def test_expired_code(self, anon_client):
        _, user_id = _signup(anon_client)
        with get_db_session() as db:
            token = db.query(EmailVerificationToken).filter_by(user_id=user_id).one()
            token.expires_at = utcnow() - timedelta(minutes=1)

        response = anon_client.post("/api/auth/verify-otp", json={"userId": user_id, "otp": FIXED_OTP})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid or expired OTP"}

    def test_code_cannot_be_reused(self, anon_client):
        _, user_id = _signup(anon_client)
        anon_client.post("/api/auth/verify-otp", json={"userId": user_id, "otp": FIXED_OTP})

        response = anon_client.post("/api/auth/verify-otp", json={"userId": user_id, "otp": FIXED_OTP})

        assert response.status_code == 400


class TestResendOtp:

    def test_resend_replaces_pending_codes(self, anon_client):
        _, user_id = _signup(anon_client)

        response = anon_client.post("/api/auth/resend-otp", json={"userId": user_id})

        assert response.status_code == 200
        assert response.json()["success"] is True
        with get_db_session() as db:
            assert db.query(EmailVerificationToken).filter_by(user_id=user_id).count() == 1

    def test_resend_for_verified_account(self, seeker):
        response = seeker.post("/api/auth/resend-otp", json={"userId": seeker.user_id})

        assert response.status_code == 400
        assert response.json() == {"error": "Email is already verified"}

    def test_resend_unknown_user(self, anon_client):
        response = anon_client.post("/api/auth/resend-otp", json={"userId": 9999})

        assert response.status_code == 404


class TestLogin:

    def test_unverified_login_needs_verification(self, anon_client):
        payload, user_id = _signup(anon_client)

        response = anon_client.post("/api/auth/login", json={"email": payload["email"], "password": PASSWORD})

        assert response.status_code == 403
        body = response.json()
        assert body["needsVerification"] is True
        assert body["userId"] == user_id
        assert "error" in body

    def test_wrong_password(self, seeker):
        client = TestClient(app)

        response = client.post("/api/auth/login", json={"email": seeker.email, "password": "nope-nope"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    def test_unknown_email(self, anon_client):
        response = anon_client.post("/api/auth/login", json={"email": "ghost@skillshub.sl", "password": PASSWORD})

        assert response.status_code == 401

    def test_login_success(self, seeker):
        client = TestClient(app)

        response = client.post("/api/auth/login", json={"email": seeker.email.upper(), "password": PASSWORD})

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["email"] == seeker.email
        assert body["user"]["role"] == "JOB_SEEKER"
        assert body["redirectUrl"] == "/dashboard/seeker"
        assert "session" in client.cookies
        with get_db_session() as db:
            assert db.get(User, seeker.user_id).last_login_at is not None


class TestSession:

    def test_me_requires_cookie(self, anon_client):
        response = anon_client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_me_returns_current_user(self, seeker):
        response = seeker.get("/api/auth/me")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == seeker.user_id
        assert body["isEmailVerified"] is True
        assert body["firstName"] == "Mariama"

    def test_garbage_cookie_rejected(self):
        client = TestClient(app, cookies={"session": "not-a-jwt"})

        assert client.get("/api/auth/me").status_code == 401

    def test_logout_revokes_session(self, seeker):
        cookie = seeker.cookies.get("session")

        response = seeker.post("/api/auth/logout")

        assert response.status_code == 200
        assert seeker.get("/api/auth/me").status_code == 401
        # The old cookie value no longer maps to a stored session
        replay = TestClient(app, cookies={"session": cookie})
        assert replay.get("/api/auth/me").status_code == 401

    def test_expired_session_rejected(self, seeker):
        with get_db_session() as db:
            for row in db.query(UserSession).filter_by(user_id=seeker.user_id):
                row.expires = utcnow() - timedelta(seconds=1)

        assert seeker.get("/api/auth/me").status_code == 401

    def test_logout_without_session(self, anon_client):
        assert anon_client.post("/api/auth/logout").status_code == 200


class TestAvailability:

    def test_requires_a_parameter(self, anon_client):
        response = anon_client.get("/api/auth/check-availability")

        assert response.status_code == 400

    def test_free_values(self, anon_client):
        response = anon_client.get("/api/auth/check-availability",
                                   params={"email": "free@skillshub.sl", "username": "free"})

        assert response.json() == {"available": {"email": True, "username": True}, "exists": False}

    def test_taken_email(self, anon_client):
        payload, _ = _signup(anon_client)

        response = anon_client.get("/api/auth/check-availability", params={"email": payload["email"]})

        assert response.json() == {"available": {"email": False}, "exists": True}

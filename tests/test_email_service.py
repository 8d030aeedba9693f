"""
Unit tests for verification-code email rendering and delivery providers.
"""

import smtplib

from skillshub.core.config import Settings
from skillshub.services import email_service
from skillshub.services.email_service import OTP_SUBJECT, EmailService, render_otp_email


def _service(**overrides) -> EmailService:
    return EmailService(Settings(**overrides))


class _FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code


class _FakeSendGrid:
    sent = []
    status_code = 202

    def __init__(self, api_key):
        self.api_key = api_key

    def send(self, mail):
        _FakeSendGrid.sent.append((self.api_key, mail.get()))
        return _FakeResponse(_FakeSendGrid.status_code)


def test_render_includes_code_and_expiry():
    message = render_otp_email("mariama@skillshub.sl", "Mariama", "482913", 10)

    assert message.subject == OTP_SUBJECT
    assert "Hello Mariama!" in message.text_content
    assert "Your verification code is: 482913" in message.text_content
    assert "expire in 10 minutes" in message.text_content
    assert "482913" in message.html_content


def test_render_without_first_name():
    assert render_otp_email("x@skillshub.sl", None, "111111", 10).to_name == "there"


def test_console_provider(caplog):
    caplog.set_level("INFO", logger=email_service.__name__)

    assert _service(email_provider="console").send_otp_email("a@skillshub.sl", "Ada", "123456") is True
    assert "OTP Code: 123456" in caplog.text


def test_unknown_provider():
    assert _service(email_provider="pigeon").send_otp_email("a@skillshub.sl", "Ada", "123456") is False


def test_smtp_without_credentials():
    service = _service(email_provider="smtp", smtp_user=None, smtp_password=None)

    assert service.send_otp_email("a@skillshub.sl", "Ada", "123456") is False


def test_smtp_failure_is_reported_not_raised(monkeypatch):
    def refuse(*args, **kwargs):
        raise smtplib.SMTPConnectError(421, "unavailable")

    monkeypatch.setattr(email_service.smtplib, "SMTP", refuse)
    service = _service(email_provider="smtp", smtp_user="mailer", smtp_password="secret")

    assert service.send_otp_email("a@skillshub.sl", "Ada", "123456") is False


class TestSendGrid:

    def setup_method(self):
        _FakeSendGrid.sent = []
        _FakeSendGrid.status_code = 202

    def test_sends_with_api_key(self, monkeypatch):
        monkeypatch.setattr(email_service, "SendGridAPIClient", _FakeSendGrid)
        service = _service(email_provider="sendgrid", sendgrid_api_key="SG.test")

        assert service.send_otp_email("mariama@skillshub.sl", "Mariama", "482913") is True

        [(api_key, payload)] = _FakeSendGrid.sent
        assert api_key == "SG.test"
        assert payload["from"] == {"email": "noreply@skillshub.sl", "name": "Salone SkillsHub"}
        assert payload["subject"] == OTP_SUBJECT
        assert payload["personalizations"][0]["to"] == [{"email": "mariama@skillshub.sl", "name": "Mariama"}]
        assert [c["type"] for c in payload["content"]] == ["text/plain", "text/html"]
        assert "482913" in payload["content"][0]["value"]

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(email_service, "SendGridAPIClient", _FakeSendGrid)
        service = _service(email_provider="sendgrid", sendgrid_api_key=None)

        assert service.send_otp_email("a@skillshub.sl", "Ada", "123456") is False
        assert _FakeSendGrid.sent == []

    def test_error_status(self, monkeypatch):
        _FakeSendGrid.status_code = 401
        monkeypatch.setattr(email_service, "SendGridAPIClient", _FakeSendGrid)
        service = _service(email_provider="sendgrid", sendgrid_api_key="SG.bad")

        assert service.send_otp_email("a@skillshub.sl", "Ada", "123456") is False

"""
Email Service

Delivers the 6-digit verification codes sent at signup and on resend.

Providers (EMAIL_PROVIDER):
- console: logs the code (development/testing)
- smtp: STARTTLS SMTP using SMTP_HOST/SMTP_PORT/SMTP_USER/SMTP_PASSWORD
- sendgrid: SendGrid Web API using SENDGRID_API_KEY

Delivery never raises; failures are logged and reported as False so
signup can finish and the user can ask for a new code.
"""

import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Content, Email, Mail, To

from skillshub.core.config import Settings, get_settings

log = logging.getLogger(__name__)

OTP_SUBJECT = "Verify Your Email - Salone SkillsHub"


@dataclass
class OtpEmail:
    """A rendered verification-code email."""
    to_email: str
    to_name: str
    code: str
    subject: str
    html_content: str
    text_content: str


def render_otp_email(to_email: str, first_name: Optional[str], code: str, expire_minutes: int) -> OtpEmail:
    name = first_name or "there"
    html_content = f"""
    <!DOCTYPE html>
    <html>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
        <div style="max-width: 600px; margin: 0 auto; padding: 32px 20px;">
            <h2 style="color: #10b981;">Salone SkillsHub</h2>
            <p>Hello {name}!</p>
            <p>Thank you for registering with Salone SkillsHub. Use the code below to verify your email address:</p>
            <p style="font-size: 36px; font-weight: bold; letter-spacing: 8px; color: #10b981;">{code}</p>
            <p style="color: #6b7280;">This code will expire in {expire_minutes} minutes.
            If you didn't create an account, please ignore this email.</p>
            <p style="color: #6b7280; font-size: 12px;">Best regards,<br>The Salone SkillsHub Team</p>
        </div>
    </body>
    </html>
    """

    text_content = (
        f"Hello {name}!\n\n"
        "Thank you for registering with Salone SkillsHub.\n\n"
        f"Your verification code is: {code}\n\n"
        f"This code will expire in {expire_minutes} minutes. "
        "If you didn't create an account, please ignore this email.\n\n"
        "Best regards,\nThe Salone SkillsHub Team"
    )

    return OtpEmail(
        to_email=to_email,
        to_name=name,
        code=code,
        subject=OTP_SUBJECT,
        html_content=html_content,
        text_content=text_content,
    )


class EmailService:
    """Sends verification-code emails through the configured provider."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.provider = settings.email_provider
        self.from_email = settings.email_from_address
        self.from_name = settings.email_from_name
        self.otp_expire_minutes = settings.otp_expire_minutes

        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_user = settings.smtp_user
        self.smtp_password = settings.smtp_password

        self.sendgrid_api_key = settings.sendgrid_api_key

    def send_otp_email(self, to_email: str, first_name: Optional[str], otp: str) -> bool:
        """
        Email the verification code.

        Returns:
            True if the provider accepted the message, False otherwise
        """
        message = render_otp_email(to_email, first_name, otp, self.otp_expire_minutes)
        try:
            if self.provider == "console":
                return self._send_console(message)
            elif self.provider == "smtp":
                return self._send_smtp(message)
            elif self.provider == "sendgrid":
                return self._send_sendgrid(message)
            else:
                log.error(f"Unknown email provider: {self.provider}")
                return False
        except Exception as e:
            log.error(f"Failed to send verification code to {to_email}: {e}")
            return False

    def _send_console(self, message: OtpEmail) -> bool:
        log.info("=" * 50)
        log.info("OTP EMAIL (console mode)")
        log.info(f"To: {message.to_email}")
        log.info(f"OTP Code: {message.code}")
        log.info("=" * 50)
        return True

    def _send_smtp(self, message: OtpEmail) -> bool:
        if not self.smtp_user or not self.smtp_password:
            log.error("SMTP credentials not configured")
            return False

        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = f'"{self.from_name}" <{self.smtp_user}>'
        msg["To"] = message.to_email
        msg.attach(MIMEText(message.text_content, "plain"))
        msg.attach(MIMEText(message.html_content, "html"))

        with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
            server.starttls()
            server.login(self.smtp_user, self.smtp_password)
            server.send_message(msg)

        log.info(f"Verification code sent via SMTP to {message.to_email}")
        return True

    def _send_sendgrid(self, message: OtpEmail) -> bool:
        if not self.sendgrid_api_key:
            log.error("SENDGRID_API_KEY not configured")
            return False

        mail = Mail(
            from_email=Email(self.from_email, self.from_name),
            to_emails=To(message.to_email, message.to_name),
            subject=message.subject,
            plain_text_content=Content("text/plain", message.text_content),
            html_content=Content("text/html", message.html_content),
        )

        response = SendGridAPIClient(self.sendgrid_api_key).send(mail)
        if 200 <= response.status_code < 300:
            log.info(f"Verification code sent via SendGrid to {message.to_email}")
            return True

        log.error(f"SendGrid error: {response.status_code}")
        return False


# Singleton
_email_service: Optional[EmailService] = None


def get_email_service() -> EmailService:
    """Get singleton email service."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service

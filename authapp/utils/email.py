"""Outgoing mail for verification and password reset links.

With ``ENABLE_EMAIL`` off (the default) messages are logged and kept in
``EmailService.outbox`` instead of being sent, which is what local
development and the test suite rely on.
"""
import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional

import authapp.config as cfg

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self, enabled: Optional[bool] = None):
        self.enabled = cfg.ENABLE_EMAIL if enabled is None else enabled
        self.outbox = []

    def send(self, to_email: str, subject: str, text_body: str) -> bool:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = cfg.EMAIL_FROM
        msg["To"] = to_email
        msg.attach(MIMEText(text_body, "plain"))

        if not self.enabled:
            logger.info("email disabled, not sending %r to %s", subject, to_email)
            self.outbox.append({"to": to_email, "subject": subject, "body": text_body})
            return False

        try:
            with smtplib.SMTP(cfg.SMTP_HOST, cfg.SMTP_PORT, timeout=10) as server:
                server.starttls()
                if cfg.SMTP_USERNAME:
                    server.login(cfg.SMTP_USERNAME, cfg.SMTP_PASSWORD)
                server.sendmail(cfg.EMAIL_FROM, [to_email], msg.as_string())
        except (smtplib.SMTPException, OSError):
            # the account action already happened; the user can ask for a resend
            logger.exception("failed to send %r to %s", subject, to_email)
            return False
        logger.info("sent %r to %s", subject, to_email)
        return True

    def send_verification(self, to_email: str, verification_id: str) -> bool:
        link = f"{cfg.FRONTEND_URL}/auth/verify/{verification_id}"
        body = (
            "Welcome!\n\n"
            f"Confirm your email address by opening this link:\n{link}\n\n"
            "If you did not create an account, ignore this message."
        )
        return self.send(to_email, "Verify your email address", body)

    def send_password_reset(self, to_email: str, change_password_id: str) -> bool:
        link = f"{cfg.FRONTEND_URL}/auth/reset-password/{change_password_id}"
        body = (
            "We received a request to reset your password.\n\n"
            f"Choose a new password here:\n{link}\n\n"
            f"The link expires in {int(cfg.RESET_TOKEN_EXPIRE_MINUTES)} minutes."
        )
        return self.send(to_email, "Reset your password", body)


email_service = EmailService()

"""
SMTP Email Sender

Sends password reset mail through an SMTP relay (Gmail by default).
smtplib is blocking, so each send runs in a worker thread and the whole
exchange is bounded by a timeout.
"""

import asyncio
import logging
import smtplib
import socket
import threading
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from src.app.services.email_sender import EmailDeliveryError, IEmailSender

logger = logging.getLogger(__name__)

RESET_SUBJECT = "Password Reset Request - Chat App"


def render_password_reset_email(reset_url: str, ttl_minutes: int):
    """Build (html, text) bodies for the reset email"""
    html_body = f"""
<div style="max-width: 600px; margin: 0 auto; padding: 20px; font-family: Arial, sans-serif;">
  <h2 style="color: #333; text-align: center;">Password Reset Request</h2>
  <p>You requested a password reset for your chat app account.</p>
  <p>Click the button below to reset your password:</p>
  <div style="text-align: center; margin: 30px 0;">
    <a href="{reset_url}"
       style="background-color: #007bff; color: white; padding: 12px 30px;
              text-decoration: none; border-radius: 5px; display: inline-block;">
      Reset Password
    </a>
  </div>
  <p style="color: #666; font-size: 14px;">
    This link will expire in {ttl_minutes} minutes for security reasons.
  </p>
  <p style="color: #666; font-size: 14px;">
    If you didn't request this reset, please ignore this email.
  </p>
</div>
"""
    text_body = (
        "You requested a password reset for your chat app account.\n\n"
        f"Reset your password using this link:\n{reset_url}\n\n"
        f"This link will expire in {ttl_minutes} minutes.\n"
        "If you didn't request this reset, please ignore this email.\n"
    )
    return html_body, text_body


class SmtpEmailSender(IEmailSender):
    """IEmailSender implementation over smtplib with STARTTLS and login"""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_address: Optional[str] = None,
        use_tls: bool = True,
        timeout_seconds: float = 10,
        token_ttl_minutes: int = 10,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_address = from_address or username
        self.use_tls = use_tls
        self.timeout_seconds = timeout_seconds
        self.token_ttl_minutes = token_ttl_minutes

    def _build_message(self, to_email: str, reset_url: str) -> MIMEMultipart:
        html_body, text_body = render_password_reset_email(
            reset_url, self.token_ttl_minutes
        )
        msg = MIMEMultipart("alternative")
        msg["Subject"] = RESET_SUBJECT
        msg["From"] = self.from_address
        msg["To"] = to_email
        msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))
        return msg

    def _send(self, msg: MIMEMultipart, abandoned: Optional[threading.Event] = None) -> None:
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout_seconds) as server:
                if self.use_tls:
                    server.starttls()
                server.login(self.username, self.password)
                # The caller has already given up and cleared the token
                if abandoned is not None and abandoned.is_set():
                    raise EmailDeliveryError(
                        EmailDeliveryError.TIMEOUT, "Send abandoned after deadline"
                    )
                server.send_message(msg)
        except smtplib.SMTPAuthenticationError as exc:
            raise EmailDeliveryError(
                EmailDeliveryError.AUTH, f"SMTP authentication failed: {exc.smtp_code}"
            ) from exc
        except socket.gaierror as exc:
            raise EmailDeliveryError(
                EmailDeliveryError.HOST_NOT_FOUND, f"SMTP host not found: {self.host}"
            ) from exc
        except socket.timeout as exc:
            raise EmailDeliveryError(
                EmailDeliveryError.TIMEOUT, "SMTP connection timed out"
            ) from exc
        except smtplib.SMTPException as exc:
            raise EmailDeliveryError(EmailDeliveryError.SMTP, str(exc)) from exc
        except OSError as exc:
            raise EmailDeliveryError(
                EmailDeliveryError.CONNECTION, f"SMTP connection failed: {exc}"
            ) from exc

    async def send_password_reset(self, to_email: str, reset_url: str) -> None:
        """
        Send the reset email, bounded by timeout_seconds.

        wait_for cannot stop the worker thread, so on timeout the thread is
        flagged and skips send_message if it has not reached it yet. A message
        already handed to the relay at that point may still arrive.
        """
        msg = self._build_message(to_email, reset_url)
        abandoned = threading.Event()
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._send, msg, abandoned),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            abandoned.set()
            raise EmailDeliveryError(
                EmailDeliveryError.TIMEOUT,
                f"SMTP send exceeded {self.timeout_seconds}s",
            ) from exc
        logger.info(f"Password reset email submitted via {self.host}")

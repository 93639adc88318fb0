"""
Request Password Reset Use Case

Handles generating a password reset secret and emailing the reset link.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from src.libs.result import Error, Result, Return
from src.app.services.email_sender import EmailDeliveryError, IEmailSender
from src.app.services.password_reset_settings import PasswordResetSettings
from src.app.services.reset_token import generate_reset_secret
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import MessageResponse

logger = logging.getLogger(__name__)

RESET_EMAIL_SENT = "Password reset email sent successfully"


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Email is required
    - Unknown email returns USER_NOT_FOUND unless conceal_unknown_email is set
    - Mail configuration must be present before any state changes
    - 32-byte random secret, only its SHA-256 digest is stored
    - Token expires after token_ttl_minutes (10 by default)
    - A new request replaces any outstanding token
    - Token state is committed before the email is sent
    - Any delivery failure clears the stored token again (best effort)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        settings: PasswordResetSettings,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.settings = settings
        self.clock = clock

    async def execute(self, email: Optional[str]) -> Result[MessageResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Email address submitted by the client

        Returns:
            Result with confirmation message, or Error

        Errors:
            - EMAIL_REQUIRED: Email missing or blank
            - USER_NOT_FOUND: No account with this email
            - EMAIL_NOT_CONFIGURED: Frontend URL or mail credentials missing
            - EMAIL_DELIVERY_FAILED: Mail transport rejected the message
        """
        if not email or not email.strip():
            return Return.err(Error("EMAIL_REQUIRED", "Email is required"))

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                if self.settings.conceal_unknown_email:
                    return Return.ok(MessageResponse(message=RESET_EMAIL_SENT))
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            missing = self.settings.missing_fields()
            if missing:
                logger.error(f"Password reset unavailable, missing config: {missing}")
                return Return.err(
                    Error("EMAIL_NOT_CONFIGURED", "Email service not configured")
                )

            user_id, user_email = user.id, user.email
            reset_secret, token_digest = generate_reset_secret()
            expires_at = self.clock() + self.settings.token_ttl

            await self.uow.users.set_reset_token(user_id, token_digest, expires_at)
            await self.uow.commit()

            reset_url = self.settings.build_reset_url(reset_secret)

            try:
                await self.email_sender.send_password_reset(user_email, reset_url)
            except EmailDeliveryError as exc:
                logger.error(
                    f"Password reset email failed for user {user_id}: "
                    f"{exc.reason} {exc}"
                )
                await self._discard_token(user_id, token_digest)
                return Return.err(
                    Error("EMAIL_DELIVERY_FAILED", "Failed to send password reset email")
                )

            return Return.ok(MessageResponse(message=RESET_EMAIL_SENT))

    async def _discard_token(self, user_id, token_digest: str) -> None:
        """Clear the token written by this request; failures are only logged"""
        try:
            await self.uow.users.clear_reset_token(user_id, token_digest)
            await self.uow.commit()
        except Exception:
            logger.exception(f"Failed to clear reset token for user {user_id}")

"""
Confirm Password Reset Use Case

Handles password reset completion with a single-use emailed secret.
"""

from datetime import datetime
from typing import Callable, Optional

import bcrypt

from src.libs.result import Error, Result, Return
from src.app.services.reset_token import digest_reset_secret
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import MessageResponse
from .password_policy import validate_password

INVALID_TOKEN_ERROR = Error("INVALID_TOKEN", "Invalid or expired reset token")


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - New password must be at least 6 characters, checked before any lookup
    - Secret is validated by hashing it and matching the stored digest
    - Token is valid only while reset_token_expiry is strictly after now
    - Wrong, expired and already used tokens all yield INVALID_TOKEN
    - Password is hashed with bcrypt (cost factor 12)
    - Password change and token clearing happen in one conditional update,
      so a token can be consumed at most once even under concurrent requests
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, token: str, new_password: Optional[str]
    ) -> Result[MessageResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Plaintext reset secret from the emailed link
            new_password: New password to set

        Returns:
            Result with confirmation message, or Error

        Errors:
            - PASSWORD_REQUIRED / PASSWORD_TOO_SHORT / PASSWORD_TOO_LONG:
              Password policy violated
            - INVALID_TOKEN: Token unknown, expired or already used
        """
        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        token_digest = digest_reset_secret(token)
        now = self.clock()

        async with self.uow:
            user = await self.uow.users.get_by_valid_reset_token(token_digest, now)
            if user is None:
                return Return.err(INVALID_TOKEN_ERROR)

            password_hash = bcrypt.hashpw(new_password.encode("utf-8"), bcrypt.gensalt(12))

            applied = await self.uow.users.complete_password_reset(
                user.id, token_digest, now, password_hash.decode("utf-8")
            )
            if not applied:
                # Consumed by a concurrent request between lookup and update
                return Return.err(INVALID_TOKEN_ERROR)

            await self.uow.commit()

            return Return.ok(MessageResponse(message="Password reset successful"))

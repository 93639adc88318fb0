"""
Login Use Case

Handles credential check and session token issuance.
"""

import bcrypt

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.api.utils.jwt import generate_jwt
from .dtos import AuthenticatedUser
from .password_policy import password_fits_bcrypt
from .signup_dto import UserProfile

# Valid bcrypt hash used to keep the unknown-email path as slow as a real check
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Unknown email and wrong password give the same INVALID_CREDENTIALS error
    - A bcrypt check runs even when the email is unknown
    - A password bcrypt cannot take (over 72 bytes) can never match
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> Result[AuthenticatedUser]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with AuthenticatedUser, or Error
        """
        password = password or ""
        if not password_fits_bcrypt(password):
            return Return.err(Error("INVALID_CREDENTIALS", "Invalid credentials"))

        async with self.uow:
            user = await self.uow.users.get_by_email(email or "")

            if user is None:
                bcrypt.checkpw(password.encode(), _DUMMY_HASH)
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid credentials"))

            password_valid = bcrypt.checkpw(
                password.encode(), user.password_hash.encode()
            )

            if not password_valid:
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid credentials"))

            return Return.ok(
                AuthenticatedUser(
                    user=UserProfile(
                        id=str(user.id),
                        full_name=user.full_name,
                        email=user.email,
                        profile_pic=user.profile_pic,
                    ),
                    access_token=generate_jwt(user.id),
                )
            )

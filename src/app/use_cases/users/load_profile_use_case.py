"""
Load Profile Use Case

Loads the current user from the session token claims.
"""

from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.signup_dto import UserProfile


class LoadProfileUseCase:
    """
    Use case for loading the signed-in user's profile.

    Business Rules:
    - Session token provides user_id
    - User must still exist
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserProfile]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(
                UserProfile(
                    id=str(user.id),
                    full_name=user.full_name,
                    email=user.email,
                    profile_pic=user.profile_pic,
                )
            )

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def set_reset_token(
        self, user_id: UUID, token_digest: str, expires_at: datetime
    ) -> None:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(reset_token_digest=token_digest, reset_token_expiry=expires_at)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def clear_reset_token(self, user_id: UUID, token_digest: str) -> bool:
        stmt = (
            update(User)
            .where(User.id == user_id, User.reset_token_digest == token_digest)
            .values(reset_token_digest=None, reset_token_expiry=None)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def get_by_valid_reset_token(
        self, token_digest: str, now: datetime
    ) -> Optional[User]:
        stmt = select(User).where(
            User.reset_token_digest == token_digest,
            User.reset_token_expiry > now,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def complete_password_reset(
        self, user_id: UUID, token_digest: str, now: datetime, password_hash: str
    ) -> bool:
        # Compare-and-swap: a concurrent completion that already cleared the
        # digest leaves nothing for this statement to match.
        stmt = (
            update(User)
            .where(
                User.id == user_id,
                User.reset_token_digest == token_digest,
                User.reset_token_expiry > now,
            )
            .values(
                password_hash=password_hash,
                reset_token_digest=None,
                reset_token_expiry=None,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

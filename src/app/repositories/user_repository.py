from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def set_reset_token(
        self, user_id: UUID, token_digest: str, expires_at: datetime
    ) -> None:
        """Store the digest/expiry pair, replacing any outstanding reset token"""
        pass

    @abstractmethod
    async def clear_reset_token(self, user_id: UUID, token_digest: str) -> bool:
        """
        Clear the digest/expiry pair if the stored digest is still token_digest.

        Returns True when a row was changed.
        """
        pass

    @abstractmethod
    async def get_by_valid_reset_token(
        self, token_digest: str, now: datetime
    ) -> Optional[User]:
        """Get user whose reset digest matches and whose expiry is after now"""
        pass

    @abstractmethod
    async def complete_password_reset(
        self, user_id: UUID, token_digest: str, now: datetime, password_hash: str
    ) -> bool:
        """
        Replace the password hash and clear the reset token in one conditional
        update, applied only while the digest still matches and has not expired.

        Returns True when the reset was applied, False when the token was
        consumed, replaced or expired in the meantime.
        """
        pass

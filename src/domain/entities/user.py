"""
User Entity

Represents a chat account holder and the state of their password reset.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - a chat account.

    Business Rules:
    - Email must be unique across all users (case-sensitive as stored)
    - Password stored as bcrypt hash (cost factor 12)
    - reset_token_digest is the SHA-256 digest of the outstanding reset secret,
      the plaintext secret is never stored
    - reset_token_digest and reset_token_expiry are set and cleared together
    - At most one outstanding reset token per user
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    full_name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    profile_pic: str = Field(default="", max_length=1024)

    # Password reset (forgot-password flow)
    reset_token_digest: Optional[str] = Field(default=None, max_length=64)
    reset_token_expiry: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_reset_token_digest", "reset_token_digest"),)

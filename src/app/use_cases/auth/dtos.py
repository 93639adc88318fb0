"""
Authentication Use Case DTOs (Data Transfer Objects)

Response classes for the auth domain.
"""

from pydantic import BaseModel

from .signup_dto import UserProfile


class MessageResponse(BaseModel):
    """Generic confirmation carrying only a human readable message"""

    message: str


class AuthenticatedUser(BaseModel):
    """Profile of the user a session was just issued for"""

    user: UserProfile
    access_token: str

"""
Signup Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- SignupCommand: Input to use case
- UserProfile: Output shared by signup, login and session check
"""

from typing import Optional
from pydantic import BaseModel


class SignupCommand(BaseModel):
    """
    Signup command - represents signup intent

    Created by API layer from the request body. Fields may be missing,
    the use case reports which rule they break.
    """

    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserProfile(BaseModel):
    """Public view of an account"""

    id: str
    full_name: str
    email: str
    profile_pic: str

"""
Use Cases

Organized into domain folders:
- auth/: Signup, login and password reset flows
- users/: Signed-in user operations
"""

from .auth import (
    SignupUseCase,
    SignupCommand,
    LoginUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
)
from .users import (
    LoadProfileUseCase,
)

__all__ = [
    # Auth
    "SignupUseCase",
    "SignupCommand",
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # Users
    "LoadProfileUseCase",
]

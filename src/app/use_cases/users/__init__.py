"""
User Use Cases

Operations on the signed-in user.
"""

from .load_profile_use_case import LoadProfileUseCase

__all__ = [
    "LoadProfileUseCase",
]

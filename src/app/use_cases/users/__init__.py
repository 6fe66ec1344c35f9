"""
User Profile Use Cases
"""

from .dtos import ProfileResponse
from .register_profile_use_case import GetProfileUseCase, RegisterProfileUseCase

__all__ = [
    "RegisterProfileUseCase",
    "GetProfileUseCase",
    "ProfileResponse",
]

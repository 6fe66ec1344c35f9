"""
User Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User


class ProfileResponse(BaseModel):
    """Public profile of a user"""

    user_id: str
    username: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None

    @classmethod
    def from_entity(cls, user: User) -> "ProfileResponse":
        return cls(
            user_id=user.user_id,
            username=user.username,
            display_name=user.display_name,
            email=user.email,
            phone_number=user.phone_number,
            profile_image_url=user.profile_image_url,
            bio=user.bio,
        )

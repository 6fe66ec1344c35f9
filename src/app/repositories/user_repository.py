from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import User


class IUserRepository(ABC):
    """User profile repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user profile by identity-provider UID"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user profile by username (case-insensitive)"""
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: List[str]) -> List[User]:
        """Get user profiles for a list of UIDs"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user profile"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user profile"""
        pass

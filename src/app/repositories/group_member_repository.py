from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import GroupMember


class IGroupMemberRepository(ABC):
    """GroupMember repository interface - application layer"""

    @abstractmethod
    async def get_by_group_and_user(
        self, group_id: UUID, user_id: str
    ) -> Optional[GroupMember]:
        """Get membership by group and user"""
        pass

    @abstractmethod
    async def get_by_group_id(self, group_id: UUID) -> List[GroupMember]:
        """Get all members of a group, oldest first"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> List[GroupMember]:
        """Get all memberships for a user"""
        pass

    @abstractmethod
    async def create(self, member: GroupMember) -> GroupMember:
        """Create a new membership"""
        pass

    @abstractmethod
    async def update(self, member: GroupMember) -> GroupMember:
        """Update existing membership"""
        pass

    @abstractmethod
    async def delete(self, member: GroupMember) -> None:
        """Delete a membership"""
        pass

    @abstractmethod
    async def delete_by_group_id(self, group_id: UUID) -> int:
        """Delete every membership of a group, returning the count"""
        pass

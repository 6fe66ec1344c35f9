from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Group


class IGroupRepository(ABC):
    """Group repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, group_id: UUID) -> Optional[Group]:
        """Get group by ID"""
        pass

    @abstractmethod
    async def create(self, group: Group) -> Group:
        """Create a new group"""
        pass

    @abstractmethod
    async def update(self, group: Group) -> Group:
        """Update existing group"""
        pass

    @abstractmethod
    async def delete(self, group: Group) -> None:
        """Delete a group"""
        pass
